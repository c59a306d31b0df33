"""Shared test fixtures for the Stakeholder Mapper test suite."""

import uuid
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from stakeholder_mapper.main import app
from stakeholder_mapper.modules.reporting.service import ExportFlow, get_export_flow
from stakeholder_mapper.modules.stakeholders.schemas import Relationship, Stakeholder
from stakeholder_mapper.modules.stakeholders.store import StakeholderStore, get_store


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store() -> StakeholderStore:
    return StakeholderStore()


@pytest.fixture
def flow() -> ExportFlow:
    return ExportFlow(min_stakeholders=3)


@pytest.fixture
async def client(store: StakeholderStore, flow: ExportFlow) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to a fresh store and export flow."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_export_flow] = lambda: flow
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


# ── Sample data fixtures ──────────────────────────────────────────────────


@pytest.fixture
def make_stakeholder():
    """Factory for stored records; only the fields under test need passing."""

    def _make(
        name: str = "Jane Doe",
        title: str = "Director",
        department: str = "",
        influence: int = 5,
        support: int = 5,
        engagement: int = 3,
        relationship: Relationship | str = Relationship.NEW,
        reports_to: str | None = None,
    ) -> Stakeholder:
        return Stakeholder(
            id=uuid.uuid4(),
            name=name,
            title=title,
            department=department,
            influence=influence,
            support=support,
            engagement=engagement,
            relationship=relationship,
            reports_to=reports_to,
        )

    return _make
