"""Stakeholders API router: records, analysis, org chart."""

import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse

from stakeholder_mapper.core.config import settings
from stakeholder_mapper.modules.stakeholders.analysis import analyze
from stakeholder_mapper.modules.stakeholders.hierarchy import (
    OrgNode,
    build_hierarchy,
    render_text,
)
from stakeholder_mapper.modules.stakeholders.schemas import (
    DEPARTMENTS,
    ENGAGEMENT_RANGE,
    INFLUENCE_RANGE,
    SUPPORT_RANGE,
    AnalysisSummary,
    OrgChartResponse,
    OrgNodeResponse,
    Relationship,
    ScoreRange,
    Stakeholder,
    StakeholderDraft,
    StakeholderOptionsResponse,
    StakeholderStateResponse,
    StakeholderUpdate,
)
from stakeholder_mapper.modules.stakeholders.store import StakeholderStore, get_store

router = APIRouter(prefix="/stakeholders", tags=["stakeholders"])


# ── Helpers ─────────────────────────────────────────────────────────────────


def _state(store: StakeholderStore) -> StakeholderStateResponse:
    records = store.records
    return StakeholderStateResponse(stakeholders=records, analysis=analyze(records))


def _node_to_response(node: OrgNode) -> OrgNodeResponse:
    s = node.stakeholder
    return OrgNodeResponse(
        id=s.id,
        name=s.name,
        title=s.title,
        department=s.department,
        relationship=s.relationship,
        depth=node.depth,
        children=[_node_to_response(c) for c in node.children],
    )


# ── Records ─────────────────────────────────────────────────────────────────


@router.get("", response_model=StakeholderStateResponse)
async def list_stakeholders(store: StakeholderStore = Depends(get_store)):
    return _state(store)


@router.get("/options", response_model=StakeholderOptionsResponse)
async def get_options():
    """Choices offered by the add/edit forms."""
    return StakeholderOptionsResponse(
        departments=list(DEPARTMENTS),
        relationships=list(Relationship),
        influence=ScoreRange(min=INFLUENCE_RANGE[0], max=INFLUENCE_RANGE[1]),
        support=ScoreRange(min=SUPPORT_RANGE[0], max=SUPPORT_RANGE[1]),
        engagement=ScoreRange(min=ENGAGEMENT_RANGE[0], max=ENGAGEMENT_RANGE[1]),
    )


@router.post(
    "",
    response_model=StakeholderStateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_stakeholder(
    body: StakeholderDraft,
    response: Response,
    store: StakeholderStore = Depends(get_store),
):
    """Add a stakeholder. A draft without name or title is ignored (200, state unchanged)."""
    if store.add(body) is None:
        response.status_code = status.HTTP_200_OK
    return _state(store)


@router.get("/analysis", response_model=AnalysisSummary | None)
async def get_analysis(store: StakeholderStore = Depends(get_store)):
    return analyze(store.records)


@router.get(
    "/hierarchy",
    response_model=OrgChartResponse,
    responses={200: {"content": {"text/plain": {}}}},
)
async def get_hierarchy(
    format: Literal["json", "text"] = Query("json"),
    strict: bool | None = Query(None, description="Reject reports-to names that match no stakeholder"),
    store: StakeholderStore = Depends(get_store),
):
    chart = build_hierarchy(
        store.records,
        strict=settings.HIERARCHY_STRICT if strict is None else strict,
    )
    if format == "text":
        return PlainTextResponse(render_text(chart))
    return OrgChartResponse(
        roots=[_node_to_response(n) for n in chart.roots],
        orphans=chart.orphans,
    )


@router.get("/{stakeholder_id}", response_model=Stakeholder)
async def get_stakeholder(
    stakeholder_id: uuid.UUID,
    store: StakeholderStore = Depends(get_store),
):
    record = store.get(stakeholder_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Stakeholder not found")
    return record


@router.patch("/{stakeholder_id}", response_model=StakeholderStateResponse)
async def update_stakeholder(
    stakeholder_id: uuid.UUID,
    body: StakeholderUpdate,
    store: StakeholderStore = Depends(get_store),
):
    """Replace a single field; scores are parsed to integers and not clamped."""
    if store.update(stakeholder_id, body.field, body.value) is None:
        raise HTTPException(status_code=404, detail="Stakeholder not found")
    return _state(store)


@router.delete("/{stakeholder_id}", response_model=StakeholderStateResponse)
async def remove_stakeholder(
    stakeholder_id: uuid.UUID,
    store: StakeholderStore = Depends(get_store),
):
    if not store.remove(stakeholder_id):
        raise HTTPException(status_code=404, detail="Stakeholder not found")
    return _state(store)
