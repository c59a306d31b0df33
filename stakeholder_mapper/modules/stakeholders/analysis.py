"""Aggregate statistics and recommendations over the stakeholder list.

Pure functions of the record list. Callers invoke ``analyze`` after every
mutating command and get a fresh frozen snapshot back.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from stakeholder_mapper.modules.stakeholders.schemas import (
    AnalysisSummary,
    Relationship,
    Stakeholder,
)

HIGH_INFLUENCE = 7
SUPPORTER_MIN = 6
SKEPTIC_MAX_SUPPORT = 4
LOW_ENGAGEMENT_MAX = 2
ENGAGEMENT_INFLUENCE_MIN = 5
EXECUTIVE_DEPARTMENT = "Executive"


def _mean_1dp(values: Sequence[int]) -> float:
    """Arithmetic mean rounded half-up to one decimal place."""
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _is_high_influence(s: Stakeholder) -> bool:
    return s.influence >= HIGH_INFLUENCE


def _is_high_risk(s: Stakeholder) -> bool:
    return s.influence >= HIGH_INFLUENCE and s.support <= SKEPTIC_MAX_SUPPORT


def generate_recommendations(stakeholders: Sequence[Stakeholder]) -> list[str]:
    """Canned advice, one line per rule that fires, in fixed rule order."""
    recommendations: list[str] = []

    champions = [
        s for s in stakeholders
        if s.relationship == Relationship.CHAMPION and _is_high_influence(s)
    ]
    skeptics = [s for s in stakeholders if _is_high_risk(s)]
    under_engaged = [
        s for s in stakeholders
        if s.engagement <= LOW_ENGAGEMENT_MAX and s.influence >= ENGAGEMENT_INFLUENCE_MIN
    ]
    executives = [s for s in stakeholders if s.department == EXECUTIVE_DEPARTMENT]

    if not champions:
        recommendations.append(
            "Priority: Identify and cultivate champions among high-influence stakeholders"
        )
    if skeptics:
        recommendations.append(
            f"Critical: Address concerns of {len(skeptics)} high-influence skeptic(s)"
        )
    if under_engaged:
        recommendations.append(
            f"Action: Increase engagement with {len(under_engaged)} "
            "influential but under-engaged stakeholder(s)"
        )
    if not executives:
        recommendations.append("Consider: Add executive-level stakeholders to your mapping")

    return recommendations


def analyze(stakeholders: Sequence[Stakeholder]) -> AnalysisSummary | None:
    """Recompute the summary from scratch. None when there are no records."""
    if not stakeholders:
        return None

    return AnalysisSummary(
        avg_influence=_mean_1dp([s.influence for s in stakeholders]),
        avg_support=_mean_1dp([s.support for s in stakeholders]),
        high_influence=sum(1 for s in stakeholders if _is_high_influence(s)),
        supporters=sum(1 for s in stakeholders if s.support >= SUPPORTER_MIN),
        risks=sum(1 for s in stakeholders if _is_high_risk(s)),
        recommendations=tuple(generate_recommendations(stakeholders)),
    )
