"""Tests for A/B test management and result recording."""
import pytest
from httpx import AsyncClient


AB_TEST = {
    "name": "Invoice layout",
    "type": "invoice_template",
    "variant_a": {"layout": "classic"},
    "variant_b": {"layout": "modern", "accent": "#0055ff"},
    "success_metric": "paid_within_14_days",
}


@pytest.mark.asyncio
async def test_admin_creates_and_updates_test(admin_client: AsyncClient):
    created = await admin_client.post("/api/ab-tests", json=AB_TEST)
    assert created.status_code == 201
    data = created.json()
    assert data["status"] == "draft"
    assert data["variant_b"] == {"layout": "modern", "accent": "#0055ff"}

    updated = await admin_client.put(f"/api/ab-tests/{data['id']}", json={"status": "running"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "running"
    assert updated.json()["name"] == AB_TEST["name"]

    listed = await admin_client.get("/api/ab-tests")
    assert [t["id"] for t in listed.json()] == [data["id"]]


@pytest.mark.asyncio
async def test_freelancer_cannot_create_test(authed_client: AsyncClient):
    response = await authed_client.post("/api/ab-tests", json=AB_TEST)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_any_user_records_results_admin_reads_them(
    admin_client: AsyncClient, authed_client: AsyncClient
):
    test_id = (await admin_client.post("/api/ab-tests", json=AB_TEST)).json()["id"]

    recorded = await authed_client.post(
        f"/api/ab-tests/{test_id}/results",
        json={"entity_id": "inv-1", "entity_type": "invoice", "variant": "B", "success": True},
    )
    assert recorded.status_code == 201
    assert recorded.json()["variant"] == "B"

    assert (await authed_client.get(f"/api/ab-tests/{test_id}/results")).status_code == 403

    results = await admin_client.get(f"/api/ab-tests/{test_id}/results")
    assert results.status_code == 200
    assert [(r["entity_id"], r["success"]) for r in results.json()] == [("inv-1", True)]


@pytest.mark.asyncio
async def test_invalid_variant_is_rejected(admin_client: AsyncClient):
    test_id = (await admin_client.post("/api/ab-tests", json=AB_TEST)).json()["id"]
    response = await admin_client.post(
        f"/api/ab-tests/{test_id}/results",
        json={"entity_id": "inv-1", "entity_type": "invoice", "variant": "C"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_results_for_missing_test_are_404(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/ab-tests/00000000-0000-0000-0000-000000000000/results",
        json={"entity_id": "inv-1", "entity_type": "invoice", "variant": "A"},
    )
    assert response.status_code == 404
