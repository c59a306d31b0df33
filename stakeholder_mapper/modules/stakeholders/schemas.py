"""Stakeholder Pydantic schemas: records, analysis snapshot, org chart."""

from __future__ import annotations

import enum
import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Relationship(str, enum.Enum):
    CHAMPION = "champion"
    SUPPORTER = "supporter"
    NEUTRAL = "neutral"
    SKEPTIC = "skeptic"
    BLOCKER = "blocker"
    NEW = "new"


DEPARTMENTS: tuple[str, ...] = (
    "Executive",
    "IT",
    "Finance",
    "Operations",
    "Legal",
    "Procurement",
    "Other",
)

INFLUENCE_RANGE = (1, 10)
SUPPORT_RANGE = (1, 10)
ENGAGEMENT_RANGE = (1, 5)


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Records ─────────────────────────────────────────────────────────────────


class StakeholderDraft(CamelModel):
    """Input of the "add stakeholder" form. Blank name/title is accepted here
    and ignored by the store."""

    name: str = ""
    title: str = ""
    department: str = ""
    influence: int = Field(default=5, ge=INFLUENCE_RANGE[0], le=INFLUENCE_RANGE[1])
    support: int = Field(default=5, ge=SUPPORT_RANGE[0], le=SUPPORT_RANGE[1])
    engagement: int = Field(default=3, ge=ENGAGEMENT_RANGE[0], le=ENGAGEMENT_RANGE[1])
    relationship: Relationship = Relationship.NEW
    reports_to: str | None = None


class Stakeholder(CamelModel):
    """A stored record. Scores are not range-checked after creation."""

    model_config = ConfigDict(validate_assignment=True)

    id: uuid.UUID
    name: str
    title: str
    department: str = ""
    influence: int
    support: int
    engagement: int
    relationship: Relationship = Relationship.NEW
    reports_to: str | None = None


class StakeholderUpdate(CamelModel):
    field: str = Field(min_length=1)
    value: int | float | str | None = None


# ── Analysis ────────────────────────────────────────────────────────────────


class AnalysisSummary(CamelModel):
    model_config = ConfigDict(frozen=True)

    avg_influence: float
    avg_support: float
    high_influence: int
    supporters: int
    risks: int
    recommendations: tuple[str, ...] = ()


# ── Responses ───────────────────────────────────────────────────────────────


class StakeholderStateResponse(CamelModel):
    stakeholders: list[Stakeholder]
    analysis: AnalysisSummary | None


class ScoreRange(BaseModel):
    min: int
    max: int


class StakeholderOptionsResponse(CamelModel):
    departments: list[str]
    relationships: list[Relationship]
    influence: ScoreRange
    support: ScoreRange
    engagement: ScoreRange


class OrgNodeResponse(CamelModel):
    id: uuid.UUID
    name: str
    title: str
    department: str
    relationship: Relationship
    depth: int
    children: list[OrgNodeResponse] = Field(default_factory=list)


class OrgChartResponse(CamelModel):
    roots: list[OrgNodeResponse]
    orphans: list[Stakeholder]
