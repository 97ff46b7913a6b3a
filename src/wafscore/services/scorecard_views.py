"""Selections bound into the action plan, detail and summary slides."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import Recommendation, Scorecard, ScorecardEntry
from .scorecard_limits import DEFAULT_VIEW_LIMITS, ViewLimits


@dataclass(frozen=True)
class ActionPlanItem:
    design_area: str
    score: int
    rating: str
    recommendations: tuple[Recommendation, ...]

    def to_mapping(self) -> dict[str, object]:
        return {
            "design_area": self.design_area,
            "score": self.score,
            "rating": self.rating,
            "recommendations": [item.to_mapping() for item in self.recommendations],
        }


def action_plan(
    scorecard: Scorecard, limits: ViewLimits = DEFAULT_VIEW_LIMITS
) -> tuple[ActionPlanItem, ...]:
    """Top recommendations of the worst-scoring areas."""

    return tuple(
        ActionPlanItem(
            design_area=entry.design_area,
            score=entry.score,
            rating=entry.rating,
            recommendations=entry.top(limits.action_plan_recommendations),
        )
        for entry in scorecard.entries[: limits.action_plan_areas]
    )


def detail_view(
    entry: ScorecardEntry, limits: ViewLimits = DEFAULT_VIEW_LIMITS
) -> tuple[Recommendation, ...]:
    return entry.top(limits.detail_recommendations)


def summary_view(scorecard: Scorecard) -> dict[str, object]:
    return {
        "overall_score": scorecard.overall_score,
        "overall_rating": scorecard.overall_rating,
    }
