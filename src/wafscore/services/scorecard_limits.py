"""Configurable limits for report ingestion, view selection and auditing."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]
STATE_DIR = PROJECT_ROOT / "state"

DEFAULT_MAX_REPORT_BYTES = 1_048_576
"""Default upper bound on the size of a report file."""

DEFAULT_ACTION_PLAN_AREAS = 3
"""Number of worst-scoring areas shown in the action plan."""

DEFAULT_ACTION_PLAN_RECOMMENDATIONS = 2
"""Recommendations per area in the action plan."""

DEFAULT_DETAIL_RECOMMENDATIONS = 7
"""Recommendations per area on a detail slide."""

DEFAULT_MAX_AUDIT_BYTES = 1_000_000
"""Audit log size at which it is rotated to ``audit.jsonl.1``."""


def _env_int(
    name: str,
    default: int,
    *,
    min_value: int = 0,
    max_value: int | None = None,
) -> int:
    """Return a bounded integer setting sourced from the environment."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    if parsed < min_value:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


@dataclass(frozen=True)
class IngestLimitConfig:
    """Size bound applied before a report is decoded."""

    max_report_bytes: int

    @classmethod
    def from_env(cls) -> "IngestLimitConfig":
        return cls(
            max_report_bytes=_env_int(
                "WAFSCORE_MAX_REPORT_BYTES",
                DEFAULT_MAX_REPORT_BYTES,
                min_value=1,
            ),
        )


@dataclass(frozen=True)
class ViewLimits:
    """Caps applied when selecting entries and recommendations for views."""

    action_plan_areas: int
    action_plan_recommendations: int
    detail_recommendations: int

    @classmethod
    def from_env(cls) -> "ViewLimits":
        """Return view caps using the configured environment variables."""

        return cls(
            action_plan_areas=_env_int(
                "WAFSCORE_ACTION_PLAN_AREAS", DEFAULT_ACTION_PLAN_AREAS, min_value=1
            ),
            action_plan_recommendations=_env_int(
                "WAFSCORE_ACTION_PLAN_RECOMMENDATIONS",
                DEFAULT_ACTION_PLAN_RECOMMENDATIONS,
                min_value=1,
            ),
            detail_recommendations=_env_int(
                "WAFSCORE_DETAIL_RECOMMENDATIONS",
                DEFAULT_DETAIL_RECOMMENDATIONS,
                min_value=1,
            ),
        )


DEFAULT_INGEST_LIMITS = IngestLimitConfig(DEFAULT_MAX_REPORT_BYTES)

DEFAULT_VIEW_LIMITS = ViewLimits(
    DEFAULT_ACTION_PLAN_AREAS,
    DEFAULT_ACTION_PLAN_RECOMMENDATIONS,
    DEFAULT_DETAIL_RECOMMENDATIONS,
)


@dataclass(frozen=True)
class AuditConfig:
    """Location and rotation size of the JSONL audit log."""

    audit_file: Path
    max_bytes: int | None

    @classmethod
    def from_env(cls) -> "AuditConfig":
        """``WAFSCORE_AUDIT_MAX_BYTES=0`` disables rotation."""

        raw_dir = os.getenv("WAFSCORE_AUDIT_DIR")
        base_dir = Path(raw_dir) if raw_dir and raw_dir.strip() else STATE_DIR
        max_bytes = _env_int("WAFSCORE_AUDIT_MAX_BYTES", DEFAULT_MAX_AUDIT_BYTES)
        return cls(
            audit_file=base_dir / "audit.jsonl",
            max_bytes=max_bytes or None,
        )
