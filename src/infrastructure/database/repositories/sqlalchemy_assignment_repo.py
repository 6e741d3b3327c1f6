"""SQLAlchemy implementation of Assignment repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.assignment import Assignment, AssignmentDetail, PaymentStatus
from infrastructure.database.models import AssignmentModel, ClientModel, ServiceAccountModel


class SQLAlchemyAssignmentRepository:
    """SQLAlchemy implementation of IAssignmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Assignment | None:
        """Get an assignment by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_active_for_client(self, client_id: UUID, now: datetime) -> Assignment | None:
        """Get the client's active assignment (latest expiry first if several)."""
        stmt = (
            select(AssignmentModel)
            .where(
                AssignmentModel.client_id == client_id,
                AssignmentModel.expiry_date >= now,
            )
            .order_by(AssignmentModel.expiry_date.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_active_for_account(self, account_id: UUID, now: datetime) -> list[Assignment]:
        """Get all active assignments on one account."""
        stmt = select(AssignmentModel).where(
            AssignmentModel.service_account_id == account_id,
            AssignmentModel.expiry_date >= now,
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_all_active(self, now: datetime) -> list[AssignmentDetail]:
        """Get every active assignment, soonest expiry first."""
        stmt = (
            self._detail_query()
            .where(AssignmentModel.expiry_date >= now)
            .order_by(AssignmentModel.expiry_date)
        )
        return await self._fetch_details(stmt)

    async def get_expired(self, now: datetime, limit: int) -> list[AssignmentDetail]:
        """Get expired assignments, most recently expired first."""
        stmt = (
            self._detail_query()
            .where(AssignmentModel.expiry_date < now)
            .order_by(AssignmentModel.expiry_date.desc())
            .limit(limit)
        )
        return await self._fetch_details(stmt)

    async def get_expiring_between(
        self, start: datetime, end: datetime
    ) -> list[AssignmentDetail]:
        """Get assignments expiring within [start, end], soonest first."""
        stmt = (
            self._detail_query()
            .where(
                AssignmentModel.expiry_date >= start,
                AssignmentModel.expiry_date <= end,
            )
            .order_by(AssignmentModel.expiry_date)
        )
        return await self._fetch_details(stmt)

    async def get_history_for_client(
        self,
        client_id: UUID,
        limit: int | None = None,
        newest_assigned_first: bool = False,
    ) -> list[AssignmentDetail]:
        """Get a client's assignments, by expiry desc (or assigned date desc)."""
        order = (
            AssignmentModel.assigned_date.desc()
            if newest_assigned_first
            else AssignmentModel.expiry_date.desc()
        )
        stmt = self._detail_query().where(AssignmentModel.client_id == client_id).order_by(order)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._fetch_details(stmt)

    async def create(self, assignment: Assignment) -> Assignment:
        """Create a new assignment."""
        model = self._to_model(assignment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, assignment: Assignment) -> Assignment:
        """Update an existing assignment."""
        model = await self._get_model(assignment.id)

        if not model:
            raise ValueError(f"Assignment {assignment.id} not found")

        model.profile_name = assignment.profile_name
        model.pin = assignment.pin
        model.expiry_date = assignment.expiry_date
        model.payment_status = assignment.payment_status.value

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete an assignment."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_for_client(self, client_id: UUID) -> int:
        """Delete every assignment of a client."""
        stmt = delete(AssignmentModel).where(AssignmentModel.client_id == client_id)
        result: Any = await self._session.execute(stmt)
        await self._session.flush()
        return int(result.rowcount or 0)

    async def delete_for_account(self, account_id: UUID) -> int:
        """Delete every assignment on an account."""
        stmt = delete(AssignmentModel).where(AssignmentModel.service_account_id == account_id)
        result: Any = await self._session.execute(stmt)
        await self._session.flush()
        return int(result.rowcount or 0)

    async def _get_model(self, id: UUID) -> AssignmentModel | None:
        stmt = select(AssignmentModel).where(AssignmentModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _detail_query() -> Select[Any]:
        """Assignments joined with client and account labels.

        Outer joins keep an assignment visible even if its parent row is gone.
        """
        return (
            select(
                AssignmentModel,
                ClientModel.name,
                ClientModel.whatsapp,
                ServiceAccountModel.name,
                ServiceAccountModel.email,
            )
            .outerjoin(ClientModel, AssignmentModel.client_id == ClientModel.id)
            .outerjoin(
                ServiceAccountModel,
                AssignmentModel.service_account_id == ServiceAccountModel.id,
            )
        )

    async def _fetch_details(self, stmt: Select[Any]) -> list[AssignmentDetail]:
        result = await self._session.execute(stmt)
        return [
            AssignmentDetail(
                assignment=self._to_entity(model),
                client_name=client_name,
                client_whatsapp=client_whatsapp,
                account_name=account_name,
                account_email=account_email,
            )
            for model, client_name, client_whatsapp, account_name, account_email in result
        ]

    def _to_entity(self, model: AssignmentModel) -> Assignment:
        """Convert ORM model to domain entity."""
        return Assignment(
            id=model.id,
            client_id=model.client_id,
            service_account_id=model.service_account_id,
            profile_name=model.profile_name,
            pin=model.pin,
            assigned_date=model.assigned_date,
            expiry_date=model.expiry_date,
            payment_status=PaymentStatus(model.payment_status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Assignment) -> AssignmentModel:
        """Convert domain entity to ORM model."""
        return AssignmentModel(
            id=entity.id,
            client_id=entity.client_id,
            service_account_id=entity.service_account_id,
            profile_name=entity.profile_name,
            pin=entity.pin,
            assigned_date=entity.assigned_date,
            expiry_date=entity.expiry_date,
            payment_status=entity.payment_status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
