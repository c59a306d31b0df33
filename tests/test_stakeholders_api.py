"""Tests for the Stakeholders REST API endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio


async def _add(client: AsyncClient, **fields) -> dict:
    body = {"name": "Ann Lee", "title": "CEO", **fields}
    resp = await client.post("/v1/stakeholders", json=body)
    assert resp.status_code == 201
    return resp.json()


class TestRecords:
    async def test_empty_state(self, client: AsyncClient):
        resp = await client.get("/v1/stakeholders")
        assert resp.status_code == 200
        assert resp.json() == {"stakeholders": [], "analysis": None}

    async def test_add_returns_fresh_state(self, client: AsyncClient):
        data = await _add(client, department="Executive", influence=8, reportsTo="")

        assert len(data["stakeholders"]) == 1
        record = data["stakeholders"][0]
        assert record["name"] == "Ann Lee"
        assert record["reportsTo"] == ""
        uuid.UUID(record["id"])
        assert data["analysis"]["avgInfluence"] == 8.0
        assert data["analysis"]["highInfluence"] == 1

    async def test_blank_draft_is_silently_ignored(self, client: AsyncClient):
        await _add(client)
        resp = await client.post("/v1/stakeholders", json={"name": "Bob Ray", "title": ""})

        assert resp.status_code == 200
        assert [s["name"] for s in resp.json()["stakeholders"]] == ["Ann Lee"]

    async def test_add_rejects_out_of_range_score(self, client: AsyncClient):
        resp = await client.post("/v1/stakeholders", json={"name": "A", "title": "B", "support": 0})
        assert resp.status_code == 422

    async def test_get_single(self, client: AsyncClient):
        record = (await _add(client))["stakeholders"][0]
        resp = await client.get(f"/v1/stakeholders/{record['id']}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "CEO"

    async def test_get_unknown(self, client: AsyncClient):
        resp = await client.get(f"/v1/stakeholders/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "http_404"

    async def test_update_parses_score_and_recomputes(self, client: AsyncClient):
        record = (await _add(client, influence=5))["stakeholders"][0]
        resp = await client.patch(
            f"/v1/stakeholders/{record['id']}", json={"field": "influence", "value": "9"}
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["stakeholders"][0]["influence"] == 9
        assert data["analysis"]["avgInfluence"] == 9.0

    async def test_update_invalid_field(self, client: AsyncClient):
        record = (await _add(client))["stakeholders"][0]
        resp = await client.patch(
            f"/v1/stakeholders/{record['id']}", json={"field": "salary", "value": 1}
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "invalid_field"

    async def test_update_unknown_id(self, client: AsyncClient):
        resp = await client.patch(
            f"/v1/stakeholders/{uuid.uuid4()}", json={"field": "influence", "value": 3}
        )
        assert resp.status_code == 404

    async def test_remove_keeps_dangling_reference(self, client: AsyncClient):
        boss = (await _add(client, name="Ann Lee"))["stakeholders"][0]
        await _add(client, name="Bob Ray", title="CFO", reportsTo="Ann Lee")

        resp = await client.delete(f"/v1/stakeholders/{boss['id']}")

        assert resp.status_code == 200
        remaining = resp.json()["stakeholders"]
        assert [s["name"] for s in remaining] == ["Bob Ray"]
        assert remaining[0]["reportsTo"] == "Ann Lee"

    async def test_remove_last_clears_analysis(self, client: AsyncClient):
        record = (await _add(client))["stakeholders"][0]
        resp = await client.delete(f"/v1/stakeholders/{record['id']}")
        assert resp.json() == {"stakeholders": [], "analysis": None}

    async def test_remove_unknown(self, client: AsyncClient):
        resp = await client.delete(f"/v1/stakeholders/{uuid.uuid4()}")
        assert resp.status_code == 404


class TestReadModels:
    async def test_options(self, client: AsyncClient):
        resp = await client.get("/v1/stakeholders/options")
        data = resp.json()
        assert "Executive" in data["departments"]
        assert data["relationships"] == ["champion", "supporter", "neutral", "skeptic", "blocker", "new"]
        assert data["engagement"] == {"min": 1, "max": 5}

    async def test_analysis_endpoint(self, client: AsyncClient):
        assert (await client.get("/v1/stakeholders/analysis")).json() is None
        await _add(client, influence=8, support=3)
        data = (await client.get("/v1/stakeholders/analysis")).json()
        assert data["risks"] == 1
        assert "Critical: Address concerns of 1 high-influence skeptic(s)" in data["recommendations"]

    async def test_hierarchy_json(self, client: AsyncClient):
        await _add(client, name="A", reportsTo="")
        await _add(client, name="B", reportsTo="A")
        await _add(client, name="C", reportsTo="Z")

        resp = await client.get("/v1/stakeholders/hierarchy")

        assert resp.status_code == 200
        data = resp.json()
        assert [n["name"] for n in data["roots"]] == ["A"]
        assert [n["name"] for n in data["roots"][0]["children"]] == ["B"]
        assert data["roots"][0]["children"][0]["depth"] == 1
        assert [o["name"] for o in data["orphans"]] == ["C"]

    async def test_hierarchy_text(self, client: AsyncClient):
        await _add(client, name="A", title="CEO")
        await _add(client, name="B", title="CFO", reportsTo="A")
        resp = await client.get("/v1/stakeholders/hierarchy", params={"format": "text"})

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "A - CEO\n  B - CFO"

    async def test_hierarchy_strict(self, client: AsyncClient):
        await _add(client, name="C", reportsTo="Z")
        resp = await client.get("/v1/stakeholders/hierarchy", params={"strict": "true"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "unknown_parent"

    async def test_hierarchy_cycle(self, client: AsyncClient):
        await _add(client, name="A", reportsTo="A")
        resp = await client.get("/v1/stakeholders/hierarchy")
        assert resp.status_code == 409
        body = resp.json()
        assert body["error"] == "hierarchy_cycle"
        assert body["detail"] == {"stakeholders": ["A"]}
