"""Shared fixtures: synthetic v1 reports and an isolated audit sink."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator, Sequence

import pytest

from wafscore.services.report_layout import LAYOUT_V1
from wafscore.services.scorecard_audit import (
    ProductionAuditSink,
    clear_audit_events,
    reset_production_audit_sink,
    set_production_audit_sink,
)
from wafscore.services.scorecard_limits import AuditConfig

DEFAULT_SCORES = (
    ("Reliability - Resiliency", "Critical", 40),
    ("Security - Identity", "Excellent", 90),
    ("Cost Optimization - Governance", "Moderate", 65),
)

DEFAULT_FINDINGS = (
    ("Reliability - Resiliency", "Deploy across availability zones", 80, "High"),
    ("Security - Identity", "Enforce MFA for administrators", 60, "High"),
    ("Reliability - Resiliency", "Document the recovery runbook", 20, "Low"),
    ("Cost Optimization - Governance", "Tag resources by cost center", 50, "Medium"),
    ("Security - Identity", "Rotate service principal secrets", 30, "Medium"),
)

LEGEND_LINES = (
    "",
    "Criticality legend",
    "Critical,0-33",
    "Moderate,34-67",
    "Excellent,68-100",
    "",
)
"""Six lines so the score table ends seven lines above the findings header."""


def finding_row(category: str, text: str, weight: object, priority: str) -> str:
    link = "https://learn.example.com/" + text.lower().replace(" ", "-")
    fields = [category, text, link, priority, "Design", "Availability"]
    fields += [str(weight), "", "N", ""]
    return ",".join(fields)


def build_report(
    *,
    summary_line: str = ",Moderate,'72/100',Overall",
    scores: Sequence[tuple[str, str, object]] = DEFAULT_SCORES,
    findings: Sequence[tuple[str, str, object, str]] = DEFAULT_FINDINGS,
    finding_lines: Sequence[str] | None = None,
    score_sentinel: str = "Your overall results",
    footer: str | None = "--,,End of recommendations",
    legend: Sequence[str] = LEGEND_LINES,
) -> str:
    """Render a report in the v1 export layout."""

    lines = [
        "Assessment,Well-Architected Review",
        "Workload,Contoso Payments",
        "Generated,2026-10-01",
        summary_line,
        "",
        score_sentinel,
    ]
    lines.extend(
        f"{category},{rating},'{score}/100'" for category, rating, score in scores
    )
    lines.extend(legend)
    lines.append(LAYOUT_V1.findings_header)
    if finding_lines is None:
        finding_lines = [finding_row(*finding) for finding in findings]
    lines.extend(finding_lines)
    if footer is not None:
        lines.append(footer)
    lines.append("Priority legend,High,Medium,Low")
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_report() -> Callable[..., str]:
    return build_report


@pytest.fixture
def report_file(tmp_path: Path) -> Path:
    path = tmp_path / "assessment.csv"
    path.write_text(build_report(), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_audit(tmp_path: Path) -> Iterator[Path]:
    """Route audit events into the test's temporary directory."""

    audit_file = tmp_path / "audit" / "audit.jsonl"
    config = AuditConfig(audit_file=audit_file, max_bytes=None)
    set_production_audit_sink(ProductionAuditSink(config))
    clear_audit_events()
    yield audit_file
    clear_audit_events()
    reset_production_audit_sink()
