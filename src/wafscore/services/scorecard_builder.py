"""Correlate findings with scores and rank the result into a scorecard."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..domain.errors import CorrelationError, FieldParseError
from ..domain.models import (
    FindingRecord,
    OverallSummary,
    Recommendation,
    Scorecard,
    ScorecardEntry,
    ScoreRecord,
)
from .report_layout import DEFAULT_LAYOUT, ReportLayout


def design_area_key(
    category: str, layout: ReportLayout = DEFAULT_LAYOUT, *, line_number: int = 0
) -> str:
    """
    Derive the design area name from a category such as
    ``"Reliability - Resiliency"``: the segment after the first delimiter.
    """

    segments = category.split(layout.design_area_delimiter)
    if len(segments) <= layout.design_area_segment:
        raise FieldParseError(
            "Category has no design area segment",
            line_number=line_number,
            field="Category",
            raw_value=category,
        )
    key = segments[layout.design_area_segment].strip()
    if not key:
        raise FieldParseError(
            "Design area segment is blank",
            line_number=line_number,
            field="Category",
            raw_value=category,
        )
    return key


def score_key(record: ScoreRecord, layout: ReportLayout = DEFAULT_LAYOUT) -> str:
    """Key of a score row; rows without a delimiter use the whole category."""

    if layout.design_area_delimiter in record.category:
        return design_area_key(
            record.category, layout, line_number=record.line_number
        )
    return record.category.strip()


def unique_design_areas(
    findings: Iterable[FindingRecord], layout: ReportLayout = DEFAULT_LAYOUT
) -> tuple[str, ...]:
    """Distinct design areas in first-seen order."""

    seen: dict[str, None] = {}
    for finding in findings:
        seen.setdefault(
            design_area_key(finding.category, layout, line_number=finding.line_number)
        )
    return tuple(seen)


def match_score(
    area: str, scores: Sequence[ScoreRecord], layout: ReportLayout = DEFAULT_LAYOUT
) -> ScoreRecord:
    """Return the single score record for ``area`` or raise CorrelationError."""

    matches = [record for record in scores if score_key(record, layout) == area]
    if len(matches) != 1:
        raise CorrelationError(area, len(matches))
    return matches[0]


def rank_recommendations(
    findings: Iterable[FindingRecord],
) -> tuple[Recommendation, ...]:
    """Project findings to recommendations, heaviest first; ties keep order."""

    recommendations = [
        Recommendation(
            weight=finding.weight,
            priority=finding.priority,
            text=finding.link_text,
            link=finding.link,
        )
        for finding in findings
    ]
    return tuple(sorted(recommendations, key=lambda item: -item.weight))


def build_entry(
    area: str,
    scores: Sequence[ScoreRecord],
    findings: Sequence[FindingRecord],
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> ScorecardEntry:
    """Build the entry for one design area independently of the others."""

    score = match_score(area, scores, layout)
    members = [
        finding
        for finding in findings
        if design_area_key(finding.category, layout, line_number=finding.line_number)
        == area
    ]
    return ScorecardEntry(
        design_area=area,
        recommendations=rank_recommendations(members),
        score=score.score,
        rating=score.rating,
    )


def build_scorecard(
    summary: OverallSummary,
    scores: Sequence[ScoreRecord],
    findings: Sequence[FindingRecord],
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> Scorecard:
    """
    Map every design area to its entry, then sort worst score first.

    ``sorted`` is stable, so areas with equal scores stay in the order they
    first appear in the findings table.
    """

    areas = unique_design_areas(findings, layout)
    entries = [build_entry(area, scores, findings, layout) for area in areas]
    return Scorecard(
        entries=tuple(sorted(entries, key=lambda entry: entry.score)),
        overall_score=summary.score,
        overall_rating=summary.rating,
    )
