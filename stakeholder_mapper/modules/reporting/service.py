"""Reporting service: export gating, snapshots, and the Exporter."""

from datetime import date

import structlog

from stakeholder_mapper.core.config import settings
from stakeholder_mapper.core.errors import (
    CaptureNotOpenError,
    ContactIncompleteError,
    ExportBlockedError,
)
from stakeholder_mapper.modules.reporting.generators import (
    HTMLReportGenerator,
    JSONReportGenerator,
)
from stakeholder_mapper.modules.reporting.generators.base import BaseReportGenerator
from stakeholder_mapper.modules.reporting.schemas import (
    ContactDetails,
    ExportArtifact,
    ExportFormat,
    ReportSnapshot,
)
from stakeholder_mapper.modules.stakeholders.analysis import analyze
from stakeholder_mapper.modules.stakeholders.store import StakeholderStore

logger = structlog.get_logger()

TOO_FEW_STAKEHOLDERS_MESSAGE = (
    "Please add at least {minimum} stakeholders to generate a meaningful report."
)
CONTACT_INCOMPLETE_MESSAGE = "Please fill in your name and email"


# ── Snapshot ─────────────────────────────────────────────────────────────────


def build_snapshot(
    store: StakeholderStore,
    contact: ContactDetails,
    report_date: date | None = None,
) -> ReportSnapshot:
    """Freeze the current map. Later store mutations never reach the snapshot."""
    stakeholders = store.snapshot()
    return ReportSnapshot(
        date=report_date or date.today(),
        stakeholders=tuple(stakeholders),
        analysis=analyze(stakeholders),
        contact=contact.model_copy(),
    )


# ── Exporter ─────────────────────────────────────────────────────────────────


def _org_settings() -> dict:
    return {
        "org_name": settings.REPORT_ORG_NAME,
        "brand_color": settings.REPORT_BRAND_COLOR,
    }


def get_generator(output_format: ExportFormat) -> BaseReportGenerator:
    """Generator strategy for an export format, branded from settings."""
    if output_format == ExportFormat.HTML:
        return HTMLReportGenerator(_org_settings(), auto_print=settings.REPORT_AUTO_PRINT)
    return JSONReportGenerator(_org_settings())


class Exporter:
    """Turns a snapshot into a downloadable artifact using one generator strategy."""

    def __init__(self, generator: BaseReportGenerator) -> None:
        self.generator = generator

    def export(self, snapshot: ReportSnapshot) -> ExportArtifact:
        content, content_type = self.generator.generate(snapshot)
        artifact = ExportArtifact(
            filename=self.generator.filename(snapshot),
            content=content,
            content_type=content_type,
        )
        logger.info(
            "report_exported",
            filename=artifact.filename,
            content_type=content_type,
            size_bytes=len(content),
            stakeholders=len(snapshot.stakeholders),
        )
        return artifact


# ── Export flow ──────────────────────────────────────────────────────────────


class ExportFlow:
    """Two-step export: open the contact capture, then submit it.

    The capture only opens once enough stakeholders are mapped. Contact
    details live for a single submit and are never kept.
    """

    def __init__(self, min_stakeholders: int | None = None) -> None:
        self.min_stakeholders = (
            settings.REPORT_MIN_STAKEHOLDERS if min_stakeholders is None else min_stakeholders
        )
        self.capture_open = False

    def _ensure_enough(self, store: StakeholderStore) -> None:
        if len(store) < self.min_stakeholders:
            self.capture_open = False
            logger.info("export_blocked", stakeholders=len(store), required=self.min_stakeholders)
            raise ExportBlockedError(
                TOO_FEW_STAKEHOLDERS_MESSAGE.format(minimum=self.min_stakeholders),
                detail={"stakeholders": len(store), "required": self.min_stakeholders},
            )

    def open_capture(self, store: StakeholderStore) -> None:
        self._ensure_enough(store)
        self.capture_open = True

    def cancel_capture(self) -> None:
        self.capture_open = False

    def submit(
        self,
        store: StakeholderStore,
        contact: ContactDetails,
        output_format: ExportFormat = ExportFormat.JSON,
    ) -> ExportArtifact:
        """Export the current map for ``contact``. Closes the capture on success."""
        if not self.capture_open:
            raise CaptureNotOpenError("Open the report form before submitting contact details.")
        if not contact.name or not contact.email:
            raise ContactIncompleteError(CONTACT_INCOMPLETE_MESSAGE)
        self._ensure_enough(store)

        logger.info("lead_captured", company=contact.company or None, output_format=output_format.value)
        artifact = Exporter(get_generator(output_format)).export(build_snapshot(store, contact))
        self.capture_open = False
        return artifact


# ── Dependency ──────────────────────────────────────────────────────────────

_flow = ExportFlow()


def get_export_flow() -> ExportFlow:
    """Process-wide export flow; overridden per test."""
    return _flow
