"""End-to-end scorecard ingestion: report text in, ranked scorecard out."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..domain.errors import ScorecardError
from ..domain.models import RawLine, Scorecard
from .report_layout import ReportLayout, get_configured_layout
from .report_loader import lines_from_text, load_report_lines, read_report
from .report_parser import (
    FindingsTableParser,
    OverallSummaryExtractor,
    ScoreTableParser,
)
from .scorecard_audit import record_build_event, record_rejection_event
from .scorecard_builder import build_scorecard
from .scorecard_limits import IngestLimitConfig, ViewLimits
from .scorecard_views import action_plan, detail_view, summary_view
from .section_locator import locate_sections

_LOG = logging.getLogger(__name__)

OPERATION = "scorecard_build"


@dataclass(frozen=True)
class PipelineResult:
    """Scorecard plus the raw counts observed while producing it."""

    scorecard: Scorecard
    score_records: int
    finding_records: int


def run_pipeline(lines: Sequence[RawLine], layout: ReportLayout) -> PipelineResult:
    """Locate, parse and rank; every stage consumes the previous one whole."""

    bounds = locate_sections(lines, layout)
    scores = ScoreTableParser().parse(bounds.score_lines(lines))
    findings = FindingsTableParser(layout).parse(bounds.findings_lines(lines))
    summary = OverallSummaryExtractor(layout).extract(lines)
    scorecard = build_scorecard(summary, scores, findings, layout)
    return PipelineResult(
        scorecard=scorecard,
        score_records=len(scores),
        finding_records=len(findings),
    )


def build_scorecard_from_text(
    text: str, layout: ReportLayout | None = None
) -> Scorecard:
    """Return the scorecard for already-decoded report text."""

    layout = layout or get_configured_layout()
    return run_pipeline(lines_from_text(text), layout).scorecard


def ingest_report_bytes(
    payload: bytes,
    layout: ReportLayout | None = None,
    view_limits: ViewLimits | None = None,
    ingest_limits: IngestLimitConfig | None = None,
) -> dict[str, object]:
    """
    Build a scorecard response from raw report bytes.

    Args:
        payload: The exported report file contents.
        layout: Export layout; defaults to the configured one.
        view_limits: Caps for the detail and action plan selections.
        ingest_limits: Size bound for the report.

    Returns:
        A schema-compliant dictionary ready for the renderer.

    Raises:
        ScorecardError: any stage failed; no partial scorecard is returned.
    """

    layout = layout or get_configured_layout()
    view_limits = view_limits or ViewLimits.from_env()
    digest = hashlib.sha256(payload).hexdigest()

    try:
        lines = load_report_lines(payload, ingest_limits)
        result = run_pipeline(lines, layout)
    except ScorecardError as exc:
        _LOG.info("Rejected report %s: %s", digest[:12], exc)
        record_rejection_event(digest, layout.version, exc.reason)
        raise

    scorecard = result.scorecard
    counts = {
        "score_records": result.score_records,
        "finding_records": result.finding_records,
        "design_areas": len(scorecard.entries),
    }
    record_build_event(digest, layout.version, counts)
    _LOG.info(
        "Built scorecard %s with %d design areas", digest[:12], len(scorecard.entries)
    )

    return {
        "operation": OPERATION,
        "report_sha256": digest,
        "layout_version": layout.version,
        "summary": {**summary_view(scorecard), **counts},
        "areas": [
            entry.to_mapping(detail_view(entry, view_limits))
            for entry in scorecard.entries
        ],
        "action_plan": [
            item.to_mapping() for item in action_plan(scorecard, view_limits)
        ],
    }


def ingest_report_text(
    text: str,
    layout: ReportLayout | None = None,
    view_limits: ViewLimits | None = None,
) -> dict[str, object]:
    """Ingest report text; lone surrogates are rejected as malformed."""

    payload = text.encode("utf-8", errors="surrogatepass")
    return ingest_report_bytes(payload, layout, view_limits)


def ingest_report_file(
    path: Path,
    layout: ReportLayout | None = None,
    view_limits: ViewLimits | None = None,
) -> dict[str, object]:
    """Read ``path`` once and ingest it."""

    return ingest_report_bytes(read_report(path), layout, view_limits)
