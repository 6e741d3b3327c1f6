"""Client repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.client import Client


class IClientRepository(Protocol):
    """Repository interface for Client entities."""

    async def get(self, id: UUID) -> Client | None:
        """Get a client by ID."""
        ...

    async def get_by_whatsapp(self, whatsapp: str, for_update: bool = False) -> Client | None:
        """Get a client by normalized WhatsApp number, optionally locking the row."""
        ...

    async def get_all(self) -> list[Client]:
        """Get all clients ordered by name."""
        ...

    async def search(self, term: str, limit: int) -> list[Client]:
        """Case-insensitive substring search on name or WhatsApp number."""
        ...

    async def create(self, client: Client) -> Client:
        """Create a new client."""
        ...

    async def update(self, client: Client) -> Client:
        """Update an existing client."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a client and return success status."""
        ...
