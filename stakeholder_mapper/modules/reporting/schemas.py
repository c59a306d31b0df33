"""Reporting Pydantic schemas: contact capture, export request, report snapshot."""

import datetime as dt
import enum
from dataclasses import dataclass

from pydantic import ConfigDict, Field

from stakeholder_mapper.modules.stakeholders.schemas import (
    AnalysisSummary,
    CamelModel,
    Stakeholder,
)


class ExportFormat(str, enum.Enum):
    JSON = "json"
    HTML = "html"


# ── Request schemas ─────────────────────────────────────────────────────────


class ContactDetails(CamelModel):
    """Lead-capture form. Only name and email are required, and only non-empty."""

    name: str = ""
    email: str = ""
    company: str = ""
    phone: str = ""


class ExportRequest(CamelModel):
    format: ExportFormat = ExportFormat.JSON
    contact: ContactDetails = Field(default_factory=ContactDetails)


# ── Response schemas ────────────────────────────────────────────────────────


class CaptureStateResponse(CamelModel):
    capture_open: bool
    stakeholder_count: int
    min_stakeholders: int


# ── Report content ──────────────────────────────────────────────────────────


class ReportSnapshot(CamelModel):
    """Frozen copy of the map at export time. Field order is the JSON key order."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    stakeholders: tuple[Stakeholder, ...]
    analysis: AnalysisSummary | None
    contact: ContactDetails


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    content_type: str
