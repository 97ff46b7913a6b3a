"""Core entities without I/O for wafscore."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawLine:
    """One uninterpreted line of the report and its zero-based position."""

    text: str
    index: int

    @property
    def line_number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class ScoreRecord:
    """Row of the per-category score table."""

    category: str
    rating: str
    score: int
    line_number: int = 0


@dataclass(frozen=True)
class FindingRecord:
    """Row of the findings table, one recommendation each."""

    category: str
    link_text: str
    link: str
    priority: str
    reporting_category: str
    reporting_subcategory: str
    weight: int
    context: str
    complete: str
    note: str
    line_number: int = 0

    @property
    def is_complete(self) -> bool:
        return self.complete.strip().upper() in {"Y", "YES"}


@dataclass(frozen=True)
class OverallSummary:
    """Overall score/rating pair taken from the summary line."""

    score: int
    rating: str


@dataclass(frozen=True)
class Recommendation:
    """Weighted recommendation owned by a single scorecard entry."""

    weight: int
    priority: str
    text: str
    link: str = ""

    def to_mapping(self) -> dict[str, object]:
        return {
            "weight": self.weight,
            "priority": self.priority,
            "text": self.text,
            "link": self.link,
        }


@dataclass(frozen=True)
class ScorecardEntry:
    """Per design area result: score, rating and ranked recommendations."""

    design_area: str
    recommendations: tuple[Recommendation, ...]
    score: int
    rating: str

    def top(self, limit: int) -> tuple[Recommendation, ...]:
        """Return at most ``limit`` of the highest weighted recommendations."""

        return self.recommendations[: max(limit, 0)]

    def to_mapping(
        self, recommendations: tuple[Recommendation, ...] | None = None
    ) -> dict[str, object]:
        """Serialize with ``recommendations`` in place of the full list."""

        if recommendations is None:
            recommendations = self.recommendations
        return {
            "design_area": self.design_area,
            "score": self.score,
            "rating": self.rating,
            "recommendations_total": len(self.recommendations),
            "recommendations": [item.to_mapping() for item in recommendations],
        }


@dataclass(frozen=True)
class Scorecard:
    """Ranked entries, worst score first, plus the overall result."""

    entries: tuple[ScorecardEntry, ...]
    overall_score: int
    overall_rating: str

    @property
    def design_areas(self) -> tuple[str, ...]:
        return tuple(entry.design_area for entry in self.entries)
