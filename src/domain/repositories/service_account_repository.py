"""Service account repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.service_account import ServiceAccount


class IServiceAccountRepository(Protocol):
    """Repository interface for ServiceAccount entities."""

    async def get(self, id: UUID) -> ServiceAccount | None:
        """Get a service account by ID."""
        ...

    async def get_by_name(self, name: str) -> ServiceAccount | None:
        """Get a service account by its unique name."""
        ...

    async def get_by_email(self, email: str) -> ServiceAccount | None:
        """Get a service account by its unique login email."""
        ...

    async def get_all(self) -> list[ServiceAccount]:
        """Get all service accounts ordered by name."""
        ...

    async def create(self, account: ServiceAccount) -> ServiceAccount:
        """Create a new service account."""
        ...

    async def update(self, account: ServiceAccount) -> ServiceAccount:
        """Update an existing service account."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a service account and return success status."""
        ...
