"""Client service layer with business logic."""

from typing import Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import ClientNotFoundError, DuplicateClientError, ValidationError
from domain.entities.assignment import AssignmentDetail
from domain.entities.client import Client
from domain.phone import normalize_whatsapp
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

# Search only kicks in once the admin typed this many characters
SEARCH_MIN_LENGTH = 2
SEARCH_MAX_RESULTS = 5


class ClientService:
    """Service layer for Client business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, name: str, whatsapp: str, notes: str = "") -> Client:
        """Register a client. The WhatsApp number is stored normalized and must be unique."""
        normalized = self._require_whatsapp(whatsapp)

        async with self._uow_factory() as uow:
            if await uow.clients.get_by_whatsapp(normalized):
                raise DuplicateClientError(normalized)

            client = Client(name=name.strip(), whatsapp=normalized, notes=notes)
            created = await uow.clients.create(client)
            await uow.commit()

            logger.info("client_created", client_id=str(created.id))
            return created

    async def update(
        self,
        client_id: UUID,
        name: Optional[str] = None,
        whatsapp: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Client:
        """Update name, WhatsApp number and notes of a client."""
        async with self._uow_factory() as uow:
            client = await uow.clients.get(client_id)
            if not client:
                raise ClientNotFoundError(str(client_id))

            if whatsapp is not None:
                normalized = self._require_whatsapp(whatsapp)
                if normalized != client.whatsapp:
                    existing = await uow.clients.get_by_whatsapp(normalized)
                    if existing and existing.id != client.id:
                        raise DuplicateClientError(normalized)
                    client.whatsapp = normalized

            if name:
                client.name = name.strip()

            if notes is not None:
                client.notes = notes

            updated = await uow.clients.update(client)
            await uow.commit()
            return updated

    async def delete(self, client_id: UUID) -> int:
        """Delete a client together with its whole assignment history.

        Assignments go first, then the client, both in the same transaction.
        Returns the number of assignments removed.
        """
        async with self._uow_factory() as uow:
            client = await uow.clients.get(client_id)
            if not client:
                raise ClientNotFoundError(str(client_id))

            removed = await uow.assignments.delete_for_client(client_id)
            await uow.clients.delete(client_id)
            await uow.commit()

            logger.info(
                "client_deleted",
                client_id=str(client_id),
                assignments_deleted=removed,
            )
            return removed  # type: ignore[no-any-return]

    async def search(self, term: Optional[str]) -> List[Client]:
        """Find clients whose name or number contains ``term``."""
        term = (term or "").strip()
        if len(term) < SEARCH_MIN_LENGTH:
            return []

        async with self._uow_factory() as uow:
            return await uow.clients.search(term, SEARCH_MAX_RESULTS)  # type: ignore[no-any-return]

    async def get_history(self, client_id: UUID) -> List[AssignmentDetail]:
        """All assignments of a client, latest expiry first."""
        async with self._uow_factory() as uow:
            client = await uow.clients.get(client_id)
            if not client:
                raise ClientNotFoundError(str(client_id))
            return await uow.assignments.get_history_for_client(client_id)  # type: ignore[no-any-return]

    @staticmethod
    def _require_whatsapp(whatsapp: str) -> str:
        normalized = normalize_whatsapp(whatsapp)
        if not normalized:
            raise ValidationError("A valid WhatsApp number is required.")
        return normalized
