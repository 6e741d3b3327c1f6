"""Assignment service layer: lifecycle of profile slot rentals."""

import secrets
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    AssignmentNotFoundError,
    DuplicateActiveAssignmentError,
    ProfileNotFoundError,
    ServiceAccountNotFoundError,
    ValidationError,
)
from domain.entities.assignment import Assignment
from domain.entities.client import Client
from domain.phone import normalize_whatsapp
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.slot_allocator import is_slot_occupied

logger = structlog.get_logger()


def generate_pin() -> str:
    """Random 4-digit PIN (1000-9999)."""
    return str(1000 + secrets.randbelow(9000))


class AssignmentService:
    """Service layer for Assignment business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(
        self,
        client_name: str,
        client_whatsapp: str,
        account_id: UUID,
        profile_name: str,
        pin: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Assignment:
        """Assign a profile slot to a client for 30 days, marked as paid.

        The client is looked up by normalized number and registered on the
        fly when unknown. A client may hold only one active assignment.
        An empty ``pin`` snapshots the profile's current PIN.
        """
        now = now or datetime.utcnow()
        normalized = normalize_whatsapp(client_whatsapp)
        if not normalized:
            raise ValidationError("A valid WhatsApp number is required.")

        async with self._uow_factory() as uow:
            account = await uow.accounts.get(account_id)
            if not account:
                raise ServiceAccountNotFoundError(str(account_id))

            profile = account.find_profile(profile_name)
            if not profile:
                raise ProfileNotFoundError(str(account_id), profile_name)

            client = await uow.clients.get_by_whatsapp(normalized, for_update=True)
            if client is None:
                client = await uow.clients.create(
                    Client(name=client_name.strip(), whatsapp=normalized)
                )
                logger.info("client_registered_on_assignment", client_id=str(client.id))
            elif await uow.assignments.get_active_for_client(client.id, now):
                raise DuplicateActiveAssignmentError(str(client.id))

            # Slot occupancy is advisory only; the panel disables taken slots.
            active_on_account = await uow.assignments.get_active_for_account(account.id, now)
            if is_slot_occupied(account, profile_name, active_on_account):
                logger.warning(
                    "profile_slot_already_occupied",
                    account_id=str(account.id),
                    profile_name=profile_name,
                )

            assignment = Assignment.start(
                client_id=client.id,
                service_account_id=account.id,
                profile_name=profile_name,
                pin=pin or profile.pin,
                now=now,
            )
            created = await uow.assignments.create(assignment)
            await uow.commit()

            logger.info(
                "assignment_created",
                assignment_id=str(created.id),
                client_id=str(client.id),
                account_id=str(account.id),
                expiry_date=created.expiry_date.isoformat(),
            )
            return created

    async def renew(self, assignment_id: UUID, now: Optional[datetime] = None) -> Assignment:
        """Restart the 30-day period from now and mark as paid."""
        async with self._uow_factory() as uow:
            assignment = await self._get_or_raise(uow, assignment_id)
            assignment.renew(now)
            updated = await uow.assignments.update(assignment)
            await uow.commit()

            logger.info(
                "assignment_renewed",
                assignment_id=str(assignment_id),
                expiry_date=updated.expiry_date.isoformat(),
            )
            return updated

    async def toggle_payment(self, assignment_id: UUID) -> Assignment:
        """Flip payment status between Paid and Pending."""
        async with self._uow_factory() as uow:
            assignment = await self._get_or_raise(uow, assignment_id)
            assignment.toggle_payment()
            updated = await uow.assignments.update(assignment)
            await uow.commit()
            return updated

    async def delete(self, assignment_id: UUID) -> None:
        """Remove an assignment permanently."""
        async with self._uow_factory() as uow:
            deleted = await uow.assignments.delete(assignment_id)
            if not deleted:
                raise AssignmentNotFoundError(str(assignment_id))
            await uow.commit()

            logger.info("assignment_deleted", assignment_id=str(assignment_id))

    async def release(self, assignment_id: UUID, new_pin: Optional[str] = None) -> str:
        """Change the profile PIN and free the slot.

        The new PIN lands on the assignment's profile and the assignment is
        deleted, in one transaction. Returns the PIN that was applied.
        """
        new_pin = new_pin or generate_pin()

        async with self._uow_factory() as uow:
            assignment = await self._get_or_raise(uow, assignment_id)

            account = await uow.accounts.get(assignment.service_account_id)
            if not account:
                raise ServiceAccountNotFoundError(str(assignment.service_account_id))
            if not account.update_pin(assignment.profile_name, new_pin):
                raise ProfileNotFoundError(str(account.id), assignment.profile_name)

            await uow.accounts.update(account)
            await uow.assignments.delete(assignment_id)
            await uow.commit()

            logger.info(
                "profile_released",
                assignment_id=str(assignment_id),
                account_id=str(account.id),
                profile_name=assignment.profile_name,
            )
            return new_pin

    async def _get_or_raise(self, uow: IUnitOfWork, assignment_id: UUID) -> Assignment:
        assignment = await uow.assignments.get(assignment_id)
        if not assignment:
            raise AssignmentNotFoundError(str(assignment_id))
        return assignment
