"""SQLAlchemy implementation of ServiceAccount repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.service_account import AccountStatus, Profile, ServiceAccount
from infrastructure.database.models import ServiceAccountModel


class SQLAlchemyServiceAccountRepository:
    """SQLAlchemy implementation of IServiceAccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> ServiceAccount | None:
        """Get a service account by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> ServiceAccount | None:
        """Get a service account by name."""
        stmt = select(ServiceAccountModel).where(ServiceAccountModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> ServiceAccount | None:
        """Get a service account by login email."""
        stmt = select(ServiceAccountModel).where(ServiceAccountModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[ServiceAccount]:
        """Get all service accounts ordered by name."""
        stmt = select(ServiceAccountModel).order_by(ServiceAccountModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, account: ServiceAccount) -> ServiceAccount:
        """Create a new service account."""
        model = self._to_model(account)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, account: ServiceAccount) -> ServiceAccount:
        """Update an existing service account."""
        model = await self._get_model(account.id)

        if not model:
            raise ValueError(f"Service account {account.id} not found")

        model.name = account.name
        model.email = account.email
        model.password = account.password
        # Reassign a fresh list so the JSON column is flagged dirty
        model.profiles = self._profiles_to_json(account.profiles)
        model.status = account.status.value

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a service account."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> ServiceAccountModel | None:
        stmt = select(ServiceAccountModel).where(ServiceAccountModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _profiles_to_json(profiles: list[Profile]) -> list[dict[str, Any]]:
        return [{"name": p.name, "pin": p.pin} for p in profiles]

    def _to_entity(self, model: ServiceAccountModel) -> ServiceAccount:
        """Convert ORM model to domain entity."""
        return ServiceAccount(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            profiles=[
                Profile(name=str(item.get("name", "")), pin=str(item.get("pin", "")))
                for item in (model.profiles or [])
            ],
            status=AccountStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ServiceAccount) -> ServiceAccountModel:
        """Convert domain entity to ORM model."""
        return ServiceAccountModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            password=entity.password,
            profiles=self._profiles_to_json(entity.profiles),
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
