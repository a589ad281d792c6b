"""Tests for invoices and quotes: numbering, totals, variants and scoping."""
import re
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from freelancehub.db.models import Client
from freelancehub.services import billing_common


YEAR = datetime.now(timezone.utc).year


@pytest.mark.asyncio
async def test_create_invoice_assigns_number_total_and_variant(
    authed_client: AsyncClient, test_client_record: Client, test_project
):
    response = await authed_client.post(
        "/api/invoices",
        json={
            "client_id": str(test_client_record.id),
            "project_id": str(test_project.id),
            "amount": "1000.00",
            "tax_amount": "180.00",
            "status": "sent",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["invoice_number"] == f"INV-{YEAR}-001"
    assert data["total_amount"] == "1180.00"
    assert data["template_variant"] in ("A", "B")
    assert data["issue_date"] is not None
    assert data["paid_date"] is None


@pytest.mark.asyncio
async def test_invoice_numbers_increase(authed_client: AsyncClient, test_client_record: Client):
    numbers = []
    for _ in range(3):
        response = await authed_client.post(
            "/api/invoices",
            json={"client_id": str(test_client_record.id), "amount": "10.00"},
        )
        numbers.append(response.json()["invoice_number"])
    assert numbers == [f"INV-{YEAR}-001", f"INV-{YEAR}-002", f"INV-{YEAR}-003"]


@pytest.mark.asyncio
async def test_tax_defaults_to_zero(authed_client: AsyncClient, test_client_record: Client):
    response = await authed_client.post(
        "/api/invoices", json={"client_id": str(test_client_record.id), "amount": "99.99"}
    )
    assert response.json()["tax_amount"] == "0.00"
    assert response.json()["total_amount"] == "99.99"


@pytest.mark.asyncio
async def test_update_recomputes_total_and_stamps_paid_date(
    authed_client: AsyncClient, test_client_record: Client
):
    created = await authed_client.post(
        "/api/invoices",
        json={"client_id": str(test_client_record.id), "amount": "100.00", "tax_amount": "10.00"},
    )
    invoice_id = created.json()["id"]

    response = await authed_client.put(
        f"/api/invoices/{invoice_id}", json={"tax_amount": "25.50", "status": "paid"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total_amount"] == "125.50"
    assert data["status"] == "paid"
    assert data["paid_date"] is not None
    assert data["invoice_number"] == created.json()["invoice_number"]
    assert data["template_variant"] == created.json()["template_variant"]


@pytest.mark.asyncio
async def test_negative_amount_is_rejected(authed_client: AsyncClient, test_client_record: Client):
    response = await authed_client.post(
        "/api/invoices", json={"client_id": str(test_client_record.id), "amount": "-5.00"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invoice_for_foreign_client_is_404(
    authed_client: AsyncClient, db: Session, other_user
):
    foreign = Client(user_id=other_user.id, name="Other")
    db.add(foreign)
    db.commit()

    response = await authed_client.post(
        "/api/invoices", json={"client_id": str(foreign.id), "amount": "10.00"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_invoice_does_not_reuse_number(
    authed_client: AsyncClient, test_client_record: Client
):
    first = await authed_client.post(
        "/api/invoices", json={"client_id": str(test_client_record.id), "amount": "1.00"}
    )
    deleted = await authed_client.delete(f"/api/invoices/{first.json()['id']}")
    assert deleted.status_code == 204
    assert (await authed_client.get(f"/api/invoices/{first.json()['id']}")).status_code == 404

    second = await authed_client.post(
        "/api/invoices", json={"client_id": str(test_client_record.id), "amount": "1.00"}
    )
    assert second.json()["invoice_number"] == f"INV-{YEAR}-002"


@pytest.mark.asyncio
async def test_create_and_update_quote(authed_client: AsyncClient, test_client_record: Client):
    created = await authed_client.post(
        "/api/quotes",
        json={
            "client_id": str(test_client_record.id),
            "title": "Website redesign",
            "amount": "5000.00",
            "tax_amount": "900.00",
        },
    )
    assert created.status_code == 201
    data = created.json()
    assert re.fullmatch(rf"QUO-{YEAR}-\d{{3}}", data["quote_number"])
    assert data["total_amount"] == "5900.00"
    assert data["status"] == "draft"

    updated = await authed_client.put(
        f"/api/quotes/{data['id']}", json={"amount": "4000.00", "status": "accepted"}
    )
    assert updated.status_code == 200
    assert updated.json()["total_amount"] == "4900.00"
    assert updated.json()["status"] == "accepted"

    listed = await authed_client.get("/api/quotes")
    assert [q["id"] for q in listed.json()] == [data["id"]]


@pytest.mark.asyncio
async def test_quote_requires_title(authed_client: AsyncClient, test_client_record: Client):
    response = await authed_client.post(
        "/api/quotes", json={"client_id": str(test_client_record.id), "amount": "10.00"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_quote(authed_client: AsyncClient, test_client_record: Client):
    created = await authed_client.post(
        "/api/quotes",
        json={"client_id": str(test_client_record.id), "title": "Audit", "amount": "10.00"},
    )
    response = await authed_client.delete(f"/api/quotes/{created.json()['id']}")
    assert response.status_code == 204
    assert (await authed_client.get("/api/quotes")).json() == []


def test_variant_assignment_uses_both_labels(monkeypatch):
    picks = iter([0, 1])
    monkeypatch.setattr(billing_common.random, "choice", lambda seq: seq[next(picks)])
    assert billing_common.pick_template_variant() == "A"
    assert billing_common.pick_template_variant() == "B"


def test_compute_total_is_exact():
    from decimal import Decimal

    assert billing_common.compute_total(Decimal("0.10"), Decimal("0.20")) == Decimal("0.30")
