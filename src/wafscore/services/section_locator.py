"""Locate the score and findings tables inside a report by sentinel lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..domain.errors import MalformedReportError
from ..domain.models import RawLine
from .report_layout import DEFAULT_LAYOUT, ReportLayout

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionBounds:
    """Inclusive line indices of both tables."""

    findings_header: int
    findings_end: int
    score_start: int
    score_end: int

    def score_lines(self, lines: Sequence[RawLine]) -> tuple[RawLine, ...]:
        return tuple(lines[self.score_start : self.score_end + 1])

    def findings_lines(self, lines: Sequence[RawLine]) -> tuple[RawLine, ...]:
        """Findings range, header line first."""

        return tuple(lines[self.findings_header : self.findings_end + 1])


def _first_containing(lines: Sequence[RawLine], sentinel: str) -> int | None:
    for line in lines:
        if sentinel in line.text:
            return line.index
    return None


def _find_header(lines: Sequence[RawLine], header: str) -> int | None:
    for line in lines:
        if line.text.strip() == header:
            return line.index
    return None


def locate_sections(
    lines: Sequence[RawLine], layout: ReportLayout = DEFAULT_LAYOUT
) -> SectionBounds:
    """
    Compute the bounds of the score and findings tables.

    Raises:
        MalformedReportError: a sentinel or the findings header is missing, or
            a computed range is empty or inverted.
    """

    header_index = _find_header(lines, layout.findings_header)
    if header_index is None:
        raise MalformedReportError("Findings table header not found.")

    footer_index = _first_containing(lines, layout.findings_end_sentinel)
    if footer_index is None:
        raise MalformedReportError(
            f"Findings footer sentinel {layout.findings_end_sentinel!r} not found."
        )

    intro_index = _first_containing(lines, layout.score_sentinel)
    if intro_index is None:
        raise MalformedReportError(
            f"Score table sentinel {layout.score_sentinel!r} not found."
        )

    bounds = SectionBounds(
        findings_header=header_index,
        findings_end=footer_index - 1,
        score_start=intro_index + 1,
        score_end=header_index - layout.score_end_offset,
    )

    if bounds.findings_header + 1 > bounds.findings_end:
        raise MalformedReportError(
            f"Findings table is empty or inverted (header at line "
            f"{bounds.findings_header + 1}, footer at line {footer_index + 1})."
        )
    if bounds.score_start > bounds.score_end:
        raise MalformedReportError(
            f"Score table is empty or inverted (lines {bounds.score_start + 1}"
            f" to {bounds.score_end + 1})."
        )

    _LOG.debug("Located report sections: %s", bounds)
    return bounds
