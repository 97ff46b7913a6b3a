"""Versioned layout descriptors for the assessment CSV export.

Every sentinel string and fixed offset the pipeline relies on lives here so a
new export version only needs a new :class:`ReportLayout` entry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

FINDINGS_COLUMNS: tuple[str, ...] = (
    "Category",
    "Link-Text",
    "Link",
    "Priority",
    "ReportingCategory",
    "ReportingSubcategory",
    "Weight",
    "Context",
    "CompleteY/N",
    "Note",
)
"""Ordered column names of the findings table."""

LAYOUT_ENV = "WAFSCORE_REPORT_LAYOUT"
"""Env var used to select a layout version from :data:`LAYOUT_REGISTRY`."""


@dataclass(frozen=True)
class ReportLayout:
    """Sentinels and offsets describing one version of the export."""

    version: str
    summary_line_index: int
    summary_min_fields: int
    score_sentinel: str
    score_end_offset: int
    findings_columns: tuple[str, ...]
    findings_end_sentinel: str
    design_area_delimiter: str
    design_area_segment: int

    def __post_init__(self) -> None:
        if self.score_end_offset < 1:
            raise ValueError(
                f"Layout {self.version!r} must end the score table above the "
                f"findings header (offset {self.score_end_offset})."
            )

    @property
    def findings_header(self) -> str:
        return ",".join(self.findings_columns)


LAYOUT_V1 = ReportLayout(
    version="v1",
    summary_line_index=3,
    summary_min_fields=3,
    score_sentinel="Your overall results",
    score_end_offset=7,
    findings_columns=FINDINGS_COLUMNS,
    findings_end_sentinel="--,,",
    design_area_delimiter="-",
    design_area_segment=1,
)

DEFAULT_LAYOUT = LAYOUT_V1

LAYOUT_REGISTRY: dict[str, ReportLayout] = {
    LAYOUT_V1.version: LAYOUT_V1,
}
"""Registry enumerating supported export layouts."""


def get_layout(name: str) -> ReportLayout:
    """Return the registered layout called ``name``."""

    layout = LAYOUT_REGISTRY.get(name.strip().lower())
    if layout is None:
        raise ValueError(f"Report layout {name!r} is not supported.")
    return layout


def get_configured_layout() -> ReportLayout:
    """Return the layout requested via :data:`LAYOUT_ENV`, or the default."""

    choice = os.getenv(LAYOUT_ENV)
    if choice and choice.strip():
        return get_layout(choice)
    return DEFAULT_LAYOUT

