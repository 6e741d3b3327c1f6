"""Assignment repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.assignment import Assignment, AssignmentDetail


class IAssignmentRepository(Protocol):
    """Repository interface for Assignment entities.

    Methods returning ``AssignmentDetail`` join the client and account so
    callers can display names without extra lookups.
    """

    async def get(self, id: UUID) -> Assignment | None:
        """Get an assignment by ID."""
        ...

    async def get_active_for_client(self, client_id: UUID, now: datetime) -> Assignment | None:
        """Get the client's assignment with expiry_date >= now, if any."""
        ...

    async def get_active_for_account(self, account_id: UUID, now: datetime) -> list[Assignment]:
        """Get all active assignments on one account."""
        ...

    async def get_all_active(self, now: datetime) -> list[AssignmentDetail]:
        """Get every assignment with expiry_date >= now."""
        ...

    async def get_expired(self, now: datetime, limit: int) -> list[AssignmentDetail]:
        """Get assignments with expiry_date < now, most recently expired first."""
        ...

    async def get_expiring_between(
        self, start: datetime, end: datetime
    ) -> list[AssignmentDetail]:
        """Get assignments expiring within [start, end], soonest first."""
        ...

    async def get_history_for_client(
        self,
        client_id: UUID,
        limit: int | None = None,
        newest_assigned_first: bool = False,
    ) -> list[AssignmentDetail]:
        """Get a client's assignments, by expiry desc (or assigned date desc)."""
        ...

    async def create(self, assignment: Assignment) -> Assignment:
        """Create a new assignment."""
        ...

    async def update(self, assignment: Assignment) -> Assignment:
        """Update an existing assignment."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an assignment and return success status."""
        ...

    async def delete_for_client(self, client_id: UUID) -> int:
        """Delete every assignment of a client. Returns the number removed."""
        ...

    async def delete_for_account(self, account_id: UUID) -> int:
        """Delete every assignment on an account. Returns the number removed."""
        ...
