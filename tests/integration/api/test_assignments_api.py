"""Integration tests for the assignments API."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient


@pytest.fixture
async def account_id(admin_client: AsyncClient) -> str:
    response = await admin_client.post(
        "/api/admin/accounts",
        json={
            "name": "Netflix1",
            "email": "family@example.com",
            "password": "s3cret",
            "profiles": [{"name": "P1", "pin": "1111"}, {"name": "P2", "pin": "2222"}],
        },
    )
    return response.json()["id"]


async def _assign(
    admin_client: AsyncClient,
    account_id: str,
    profile: str = "P1",
    whatsapp: str = "0987111222",
    name: str = "Ana",
    **extra,
):
    return await admin_client.post(
        "/api/admin/assignments",
        json={
            "clientName": name,
            "clientWhatsapp": whatsapp,
            "accountId": account_id,
            "profileName": profile,
            **extra,
        },
    )


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value)


class TestCreateAssignment:
    @pytest.mark.asyncio
    async def test_create_assignment(self, admin_client: AsyncClient, account_id: str):
        before = datetime.utcnow()

        response = await _assign(admin_client, account_id)

        assert response.status_code == 201
        data = response.json()
        assert data["profileName"] == "P1"
        assert data["pin"] == "1111"
        assert data["paymentStatus"] == "Paid"
        assert data["state"] == "active"
        expiry = _parse(data["expiryDate"])
        assert before + timedelta(days=30) <= expiry <= datetime.utcnow() + timedelta(days=30)

    @pytest.mark.asyncio
    async def test_explicit_pin_is_kept(self, admin_client: AsyncClient, account_id: str):
        response = await _assign(admin_client, account_id, pin="8080")

        assert response.json()["pin"] == "8080"

    @pytest.mark.asyncio
    async def test_registers_client_on_the_fly(
        self, admin_client: AsyncClient, account_id: str
    ):
        await _assign(admin_client, account_id, whatsapp="0981000111", name="Bruno")

        search = await admin_client.get("/api/admin/clients/search", params={"term": "Bruno"})
        assert search.json()[0]["whatsapp"] == "595981000111"

    @pytest.mark.asyncio
    async def test_second_active_assignment_is_400(
        self, admin_client: AsyncClient, account_id: str
    ):
        await _assign(admin_client, account_id, profile="P1")

        response = await _assign(admin_client, account_id, profile="P2", whatsapp="+595987111222")

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_ACTIVE_ASSIGNMENT"

    @pytest.mark.asyncio
    async def test_blank_client_name_is_400(self, admin_client: AsyncClient, account_id: str):
        response = await _assign(admin_client, account_id, name="   ")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unknown_profile_is_404(self, admin_client: AsyncClient, account_id: str):
        response = await _assign(admin_client, account_id, profile="P9")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_account_is_404(self, admin_client: AsyncClient):
        response = await _assign(admin_client, "00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["error_code"] == "ACCOUNT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_occupies_slot(self, admin_client: AsyncClient, account_id: str):
        await _assign(admin_client, account_id, profile="P2")

        slots = await admin_client.get(f"/api/admin/accounts/{account_id}/slots")

        body = slots.json()
        assert body["availableSlots"] == 1
        assert {s["name"]: s["occupied"] for s in body["slots"]} == {"P1": False, "P2": True}


class TestAssignmentLifecycle:
    @pytest.mark.asyncio
    async def test_toggle_payment_twice_restores(
        self, admin_client: AsyncClient, account_id: str
    ):
        created = (await _assign(admin_client, account_id)).json()

        first = await admin_client.patch(f"/api/admin/assignments/{created['id']}/payment")
        second = await admin_client.patch(f"/api/admin/assignments/{created['id']}/payment")

        assert first.json()["paymentStatus"] == "Pending"
        assert second.json()["paymentStatus"] == "Paid"

    @pytest.mark.asyncio
    async def test_renew_resets_to_thirty_days_and_paid(
        self, admin_client: AsyncClient, account_id: str
    ):
        created = (await _assign(admin_client, account_id)).json()
        await admin_client.patch(f"/api/admin/assignments/{created['id']}/payment")

        response = await admin_client.patch(f"/api/admin/assignments/{created['id']}/renew")

        assert response.status_code == 200
        data = response.json()
        assert data["paymentStatus"] == "Paid"
        assert _parse(data["expiryDate"]) >= _parse(created["expiryDate"])

    @pytest.mark.asyncio
    async def test_delete_frees_slot(self, admin_client: AsyncClient, account_id: str):
        created = (await _assign(admin_client, account_id)).json()

        response = await admin_client.delete(f"/api/admin/assignments/{created['id']}")

        assert response.status_code == 200
        slots = await admin_client.get(f"/api/admin/accounts/{account_id}/slots")
        assert slots.json()["availableSlots"] == 2

    @pytest.mark.asyncio
    async def test_delete_missing_is_404(self, admin_client: AsyncClient):
        response = await admin_client.delete(
            "/api/admin/assignments/00000000-0000-0000-0000-000000000000"
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "ASSIGNMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_release_with_pin(self, admin_client: AsyncClient, account_id: str):
        created = (await _assign(admin_client, account_id)).json()

        response = await admin_client.post(
            f"/api/admin/assignments/{created['id']}/release", json={"newPin": "4321"}
        )

        assert response.status_code == 200
        assert response.json()["pin"] == "4321"
        slots = (await admin_client.get(f"/api/admin/accounts/{account_id}/slots")).json()
        assert slots["availableSlots"] == 2
        assert {s["name"]: s["pin"] for s in slots["slots"]}["P1"] == "4321"

    @pytest.mark.asyncio
    async def test_release_without_body_generates_pin(
        self, admin_client: AsyncClient, account_id: str
    ):
        created = (await _assign(admin_client, account_id)).json()

        response = await admin_client.post(f"/api/admin/assignments/{created['id']}/release")

        pin = response.json()["pin"]
        assert len(pin) == 4 and pin.isdigit()

    @pytest.mark.asyncio
    async def test_release_rejects_malformed_pin(
        self, admin_client: AsyncClient, account_id: str
    ):
        created = (await _assign(admin_client, account_id)).json()

        response = await admin_client.post(
            f"/api/admin/assignments/{created['id']}/release", json={"newPin": "12"}
        )

        assert response.status_code == 400
