"""Service account service layer with business logic."""

from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    DuplicateServiceAccountError,
    ProfileNotFoundError,
    ServiceAccountNotFoundError,
)
from domain.entities.service_account import Profile, ServiceAccount
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.slot_allocator import AccountAvailability, compute_availability
from infrastructure.security.provider import ICredentialVault

logger = structlog.get_logger()


class ServiceAccountService:
    """Service layer for ServiceAccount business logic.

    Passwords cross this boundary in plaintext and are stored encrypted.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        vault: ICredentialVault,
    ) -> None:
        self._uow_factory = uow_factory
        self._vault = vault

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        profiles: Optional[List[Profile]] = None,
    ) -> ServiceAccount:
        """Create an account. Name and email must both be unique."""
        async with self._uow_factory() as uow:
            await self._ensure_unique(uow, name=name, email=email)

            account = ServiceAccount(
                name=name,
                email=email,
                password=self._vault.encrypt(password),
                profiles=list(profiles or []),
            )
            created = await uow.accounts.create(account)
            await uow.commit()

            logger.info(
                "service_account_created",
                account_id=str(created.id),
                profiles=created.total_profiles,
            )
            return created

    async def update(
        self,
        account_id: UUID,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        profiles: Optional[List[Profile]] = None,
    ) -> ServiceAccount:
        """Update an account.

        The password is re-encrypted only when it differs from the current
        plaintext; ``None`` keeps it unchanged.
        """
        async with self._uow_factory() as uow:
            account = await self._get_or_raise(uow, account_id)

            await self._ensure_unique(
                uow,
                name=name if name and name != account.name else None,
                email=email if email and email != account.email else None,
            )

            if name:
                account.name = name
            if email:
                account.email = email
            if password is not None and password != self._vault.decrypt(account.password):
                account.password = self._vault.encrypt(password)
            if profiles is not None:
                account.profiles = list(profiles)
            account.updated_at = datetime.utcnow()

            updated = await uow.accounts.update(account)
            await uow.commit()
            return updated

    async def reveal_password(self, account_id: UUID) -> str:
        """Decrypted password of an account, for the edit form."""
        async with self._uow_factory() as uow:
            account = await self._get_or_raise(uow, account_id)
            return self._vault.decrypt(account.password)

    async def toggle_status(self, account_id: UUID) -> ServiceAccount:
        """Flip an account between Active and Inactive."""
        async with self._uow_factory() as uow:
            account = await self._get_or_raise(uow, account_id)
            account.toggle_status()
            updated = await uow.accounts.update(account)
            await uow.commit()
            return updated

    async def update_profile_pin(
        self, account_id: UUID, profile_name: str, new_pin: str
    ) -> ServiceAccount:
        """Set a new PIN on one profile of the account."""
        async with self._uow_factory() as uow:
            account = await self._get_or_raise(uow, account_id)
            if not account.update_pin(profile_name, new_pin):
                raise ProfileNotFoundError(str(account_id), profile_name)

            updated = await uow.accounts.update(account)
            await uow.commit()

            logger.info(
                "profile_pin_updated",
                account_id=str(account_id),
                profile_name=profile_name,
            )
            return updated

    async def delete(self, account_id: UUID) -> int:
        """Delete an account and every assignment on it, in one transaction.

        Returns the number of assignments removed.
        """
        async with self._uow_factory() as uow:
            await self._get_or_raise(uow, account_id)

            removed = await uow.assignments.delete_for_account(account_id)
            await uow.accounts.delete(account_id)
            await uow.commit()

            logger.info(
                "service_account_deleted",
                account_id=str(account_id),
                assignments_deleted=removed,
            )
            return removed  # type: ignore[no-any-return]

    async def get_availability(
        self, account_id: UUID, now: Optional[datetime] = None
    ) -> AccountAvailability:
        """Free and occupied profile slots of an account."""
        now = now or datetime.utcnow()
        async with self._uow_factory() as uow:
            account = await self._get_or_raise(uow, account_id)
            active = await uow.assignments.get_active_for_account(account_id, now)
            return compute_availability(account, active)

    async def _get_or_raise(self, uow: IUnitOfWork, account_id: UUID) -> ServiceAccount:
        account = await uow.accounts.get(account_id)
        if not account:
            raise ServiceAccountNotFoundError(str(account_id))
        return account

    async def _ensure_unique(
        self,
        uow: IUnitOfWork,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Raise if another account already uses ``name`` or ``email``."""
        if name and await uow.accounts.get_by_name(name):
            raise DuplicateServiceAccountError("name", name)
        if email and await uow.accounts.get_by_email(email):
            raise DuplicateServiceAccountError("email", email)
