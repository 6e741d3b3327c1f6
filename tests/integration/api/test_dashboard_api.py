"""Integration tests for the admin overview."""

from datetime import datetime, timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import AssignmentModel, ClientModel


async def _seed_assignment(
    session_factory: async_sessionmaker[AsyncSession],
    account_id: str,
    name: str,
    whatsapp: str,
    profile: str,
    expires_in: timedelta,
) -> None:
    now = datetime.utcnow()
    async with session_factory() as session:
        client = ClientModel(name=name, whatsapp=whatsapp)
        session.add(client)
        await session.flush()
        session.add(
            AssignmentModel(
                client_id=client.id,
                service_account_id=UUID(account_id),
                profile_name=profile,
                pin="0000",
                assigned_date=now - timedelta(days=30),
                expiry_date=now + expires_in,
                payment_status="Paid",
            )
        )
        await session.commit()


@pytest.fixture
async def account_id(admin_client: AsyncClient) -> str:
    response = await admin_client.post(
        "/api/admin/accounts",
        json={
            "name": "Netflix1",
            "email": "family@example.com",
            "password": "s3cret",
            "profiles": [
                {"name": "P1", "pin": "1111"},
                {"name": "P2", "pin": "2222"},
                {"name": "P3", "pin": "3333"},
            ],
        },
    )
    return response.json()["id"]


class TestAdminData:
    @pytest.mark.asyncio
    async def test_empty_store(self, admin_client: AsyncClient):
        response = await admin_client.get("/api/admin/data")

        assert response.status_code == 200
        assert response.json() == {
            "clients": [],
            "serviceAccounts": [],
            "activeAssignments": [],
            "expiredAssignments": [],
            "expiringSoonAssignments": [],
        }

    @pytest.mark.asyncio
    async def test_splits_assignments_by_state(
        self,
        admin_client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
        account_id: str,
    ):
        await _seed_assignment(
            session_factory, account_id, "Ana", "595987111222", "P1", timedelta(days=20)
        )
        await _seed_assignment(
            session_factory, account_id, "Bruno", "595981000111", "P2", timedelta(days=3)
        )
        await _seed_assignment(
            session_factory, account_id, "Carla", "595981000222", "P3", timedelta(days=-1)
        )

        data = (await admin_client.get("/api/admin/data")).json()

        assert len(data["clients"]) == 3
        assert {a["client"]["name"] for a in data["activeAssignments"]} == {"Ana", "Bruno"}
        assert [a["client"]["name"] for a in data["expiringSoonAssignments"]] == ["Bruno"]
        assert [a["client"]["name"] for a in data["expiredAssignments"]] == ["Carla"]
        assert data["expiredAssignments"][0]["state"] == "expired"

        account = data["serviceAccounts"][0]
        assert account["availableSlots"] == 1
        occupied = {p["name"]: p["occupied"] for p in account["profiles"]}
        assert occupied == {"P1": True, "P2": True, "P3": False}
        assert "password" not in account

    @pytest.mark.asyncio
    async def test_active_assignments_soonest_expiry_first(
        self,
        admin_client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
        account_id: str,
    ):
        await _seed_assignment(
            session_factory, account_id, "Late", "595981000001", "P1", timedelta(days=25)
        )
        await _seed_assignment(
            session_factory, account_id, "Early", "595981000002", "P2", timedelta(days=10)
        )

        data = (await admin_client.get("/api/admin/data")).json()

        assert [a["client"]["name"] for a in data["activeAssignments"]] == ["Early", "Late"]
