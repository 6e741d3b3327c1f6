"""Integration tests for the clients API."""

import pytest
from httpx import AsyncClient
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import AssignmentModel, ClientModel


async def _create_client(admin_client: AsyncClient, name: str, whatsapp: str) -> dict:
    response = await admin_client.post(
        "/api/admin/clients", json={"name": name, "whatsapp": whatsapp}
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateClient:
    @pytest.mark.asyncio
    async def test_number_is_normalized(self, admin_client: AsyncClient):
        data = await _create_client(admin_client, "Ana", "0987 111 222")

        assert data["name"] == "Ana"
        assert data["whatsapp"] == "595987111222"
        assert data["notes"] == ""

    @pytest.mark.asyncio
    async def test_same_number_in_other_format_is_duplicate(self, admin_client: AsyncClient):
        await _create_client(admin_client, "Ana", "0987111222")

        response = await admin_client.post(
            "/api/admin/clients", json={"name": "Ana bis", "whatsapp": "+595 987 111 222"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_CLIENT"

    @pytest.mark.asyncio
    async def test_blank_name_is_400(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/clients", json={"name": "   ", "whatsapp": "0981000111"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_name_is_stored_trimmed(self, admin_client: AsyncClient):
        data = await _create_client(admin_client, "  Ana  ", "0981000111")

        assert data["name"] == "Ana"

    @pytest.mark.asyncio
    async def test_number_without_digits_is_400(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/clients", json={"name": "Ana", "whatsapp": "none"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestUpdateClient:
    @pytest.mark.asyncio
    async def test_update_name_number_and_notes(self, admin_client: AsyncClient):
        data = await _create_client(admin_client, "Ana", "0987111222")

        response = await admin_client.put(
            f"/api/admin/clients/{data['id']}",
            json={"name": "Ana María", "whatsapp": "0981000111", "notes": "pays on the 5th"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Ana María"
        assert body["whatsapp"] == "595981000111"
        assert body["notes"] == "pays on the 5th"

    @pytest.mark.asyncio
    async def test_update_missing_client_is_404(self, admin_client: AsyncClient):
        response = await admin_client.put(
            "/api/admin/clients/00000000-0000-0000-0000-000000000000", json={"name": "x"}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CLIENT_NOT_FOUND"


class TestSearchClients:
    @pytest.mark.asyncio
    async def test_matches_name_and_number(self, admin_client: AsyncClient):
        await _create_client(admin_client, "Ana", "0987111222")
        await _create_client(admin_client, "Bruno", "0981000111")

        by_name = await admin_client.get("/api/admin/clients/search", params={"term": "ana"})
        by_number = await admin_client.get(
            "/api/admin/clients/search", params={"term": "981000"}
        )

        assert [c["name"] for c in by_name.json()] == ["Ana"]
        assert [c["name"] for c in by_number.json()] == ["Bruno"]

    @pytest.mark.asyncio
    async def test_short_term_returns_empty_list(self, admin_client: AsyncClient):
        await _create_client(admin_client, "Ana", "0987111222")

        response = await admin_client.get("/api/admin/clients/search", params={"term": "a"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_returns_at_most_five(self, admin_client: AsyncClient):
        for i in range(7):
            await _create_client(admin_client, f"Cliente {i}", f"098100020{i}")

        response = await admin_client.get(
            "/api/admin/clients/search", params={"term": "cliente"}
        )

        assert len(response.json()) == 5


class TestDeleteClient:
    @pytest.mark.asyncio
    async def test_delete_cascades_to_assignments(
        self,
        admin_client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        account = await admin_client.post(
            "/api/admin/accounts",
            json={
                "name": "Netflix1",
                "email": "family@example.com",
                "password": "s3cret",
                "profiles": [{"name": "P1", "pin": "1111"}],
            },
        )
        created = await admin_client.post(
            "/api/admin/assignments",
            json={
                "clientName": "Ana",
                "clientWhatsapp": "0987111222",
                "accountId": account.json()["id"],
                "profileName": "P1",
            },
        )
        client_id = created.json()["clientId"]

        response = await admin_client.delete(f"/api/admin/clients/{client_id}")

        assert response.status_code == 200
        async with session_factory() as session:
            remaining = await session.scalar(
                select(func.count()).select_from(AssignmentModel)
            )
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_delete_missing_client_is_404(self, admin_client: AsyncClient):
        response = await admin_client.delete(
            "/api/admin/clients/00000000-0000-0000-0000-000000000000"
        )

        assert response.status_code == 404


class TestClientHistory:
    @pytest.mark.asyncio
    async def test_history_lists_assignments_with_labels(self, admin_client: AsyncClient):
        account = await admin_client.post(
            "/api/admin/accounts",
            json={
                "name": "Netflix1",
                "email": "family@example.com",
                "password": "s3cret",
                "profiles": [{"name": "P1", "pin": "1111"}],
            },
        )
        created = await admin_client.post(
            "/api/admin/assignments",
            json={
                "clientName": "Ana",
                "clientWhatsapp": "0987111222",
                "accountId": account.json()["id"],
                "profileName": "P1",
            },
        )

        response = await admin_client.get(
            f"/api/admin/clients/{created.json()['clientId']}/history"
        )

        assert response.status_code == 200
        history = response.json()
        assert len(history) == 1
        assert history[0]["serviceAccount"]["name"] == "Netflix1"
        assert history[0]["client"]["whatsapp"] == "595987111222"


class TestStorageCascade:
    @pytest.mark.asyncio
    async def test_foreign_keys_cascade_on_raw_delete(
        self,
        admin_client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        account = await admin_client.post(
            "/api/admin/accounts",
            json={
                "name": "Netflix1",
                "email": "family@example.com",
                "password": "s3cret",
                "profiles": [{"name": "P1", "pin": "1111"}],
            },
        )
        await admin_client.post(
            "/api/admin/assignments",
            json={
                "clientName": "Ana",
                "clientWhatsapp": "0987111222",
                "accountId": account.json()["id"],
                "profileName": "P1",
            },
        )

        async with session_factory() as session:
            await session.execute(delete(ClientModel))
            await session.commit()
            remaining = await session.scalar(
                select(func.count()).select_from(AssignmentModel)
            )

        assert remaining == 0
