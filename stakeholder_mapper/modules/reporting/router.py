"""Reporting API router: contact capture and report export."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from stakeholder_mapper.modules.reporting.schemas import CaptureStateResponse, ExportRequest
from stakeholder_mapper.modules.reporting.service import ExportFlow, get_export_flow
from stakeholder_mapper.modules.stakeholders.store import StakeholderStore, get_store

logger = structlog.get_logger()

router = APIRouter(prefix="/reports", tags=["reports"])


def _capture_state(flow: ExportFlow, store: StakeholderStore) -> CaptureStateResponse:
    return CaptureStateResponse(
        capture_open=flow.capture_open,
        stakeholder_count=len(store),
        min_stakeholders=flow.min_stakeholders,
    )


# ── Capture ─────────────────────────────────────────────────────────────────


@router.get("/capture", response_model=CaptureStateResponse)
async def get_capture(
    flow: ExportFlow = Depends(get_export_flow),
    store: StakeholderStore = Depends(get_store),
):
    return _capture_state(flow, store)


@router.post("/capture", response_model=CaptureStateResponse)
async def open_capture(
    flow: ExportFlow = Depends(get_export_flow),
    store: StakeholderStore = Depends(get_store),
):
    """Open the contact form. Blocked (400) until enough stakeholders are mapped."""
    flow.open_capture(store)
    logger.info("report_capture_opened", stakeholders=len(store))
    return _capture_state(flow, store)


@router.delete("/capture", response_model=CaptureStateResponse)
async def cancel_capture(
    flow: ExportFlow = Depends(get_export_flow),
    store: StakeholderStore = Depends(get_store),
):
    flow.cancel_capture()
    return _capture_state(flow, store)


# ── Export ──────────────────────────────────────────────────────────────────


@router.post("/export")
async def export_report(
    body: ExportRequest,
    flow: ExportFlow = Depends(get_export_flow),
    store: StakeholderStore = Depends(get_store),
):
    """Submit contact details and download the report (JSON file or printable HTML)."""
    artifact = flow.submit(store, body.contact, body.format)
    return Response(
        content=artifact.content,
        media_type=artifact.content_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
