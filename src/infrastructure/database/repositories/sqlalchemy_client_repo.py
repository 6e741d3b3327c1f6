"""SQLAlchemy implementation of Client repository."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.client import Client
from infrastructure.database.models import ClientModel


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyClientRepository:
    """SQLAlchemy implementation of IClientRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Client | None:
        """Get a client by ID."""
        stmt = select(ClientModel).where(ClientModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_whatsapp(self, whatsapp: str, for_update: bool = False) -> Client | None:
        """Get a client by normalized WhatsApp number.

        ``for_update`` locks the row until the transaction ends on databases
        that support SELECT ... FOR UPDATE (ignored by SQLite).
        """
        stmt = select(ClientModel).where(ClientModel.whatsapp == whatsapp)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Client]:
        """Get all clients ordered by name."""
        stmt = select(ClientModel).order_by(ClientModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def search(self, term: str, limit: int) -> list[Client]:
        """Case-insensitive substring search on name or WhatsApp number."""
        pattern = f"%{_escape_like(term)}%"
        stmt = (
            select(ClientModel)
            .where(
                or_(
                    ClientModel.name.ilike(pattern, escape="\\"),
                    ClientModel.whatsapp.ilike(pattern, escape="\\"),
                )
            )
            .order_by(ClientModel.name)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, client: Client) -> Client:
        """Create a new client."""
        model = self._to_model(client)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, client: Client) -> Client:
        """Update an existing client."""
        stmt = select(ClientModel).where(ClientModel.id == client.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Client {client.id} not found")

        model.name = client.name
        model.whatsapp = client.whatsapp
        model.notes = client.notes

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a client."""
        stmt = select(ClientModel).where(ClientModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ClientModel) -> Client:
        """Convert ORM model to domain entity."""
        return Client(
            id=model.id,
            name=model.name,
            whatsapp=model.whatsapp,
            notes=model.notes or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Client) -> ClientModel:
        """Convert domain entity to ORM model."""
        return ClientModel(
            id=entity.id,
            name=entity.name,
            whatsapp=entity.whatsapp,
            notes=entity.notes,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
