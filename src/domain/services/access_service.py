"""Client-facing lookups: current credentials and assignment history."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from core.exceptions import ClientNotFoundError, NoActiveAssignmentError
from domain.entities.assignment import AssignmentDetail
from domain.phone import normalize_whatsapp
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.security.provider import ICredentialVault

PUBLIC_HISTORY_LIMIT = 10


@dataclass(frozen=True, slots=True)
class ClientAccess:
    """What a client needs to log into their profile."""

    client_name: str
    email: str
    password: str
    profile_name: str
    pin: str
    expiry_date: datetime

    @property
    def expires_on(self) -> str:
        """Expiry as a day/month/year string."""
        return self.expiry_date.strftime("%d/%m/%Y")


class AccessService:
    """Read-only queries served to clients by WhatsApp number."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        vault: ICredentialVault,
    ) -> None:
        self._uow_factory = uow_factory
        self._vault = vault

    async def get_access(self, whatsapp: str, now: Optional[datetime] = None) -> ClientAccess:
        """Resolve the client's active profile with decrypted account credentials.

        Raises ClientNotFoundError for an unknown number and
        NoActiveAssignmentError when the client has nothing active.
        """
        now = now or datetime.utcnow()
        normalized = normalize_whatsapp(whatsapp)

        async with self._uow_factory() as uow:
            client = await uow.clients.get_by_whatsapp(normalized) if normalized else None
            if not client:
                raise ClientNotFoundError(normalized)

            assignment = await uow.assignments.get_active_for_client(client.id, now)
            if not assignment:
                raise NoActiveAssignmentError()

            account = await uow.accounts.get(assignment.service_account_id)
            if not account:
                raise NoActiveAssignmentError()

            return ClientAccess(
                client_name=client.name,
                email=account.email,
                password=self._vault.decrypt(account.password),
                profile_name=assignment.profile_name,
                pin=assignment.pin,
                expiry_date=assignment.expiry_date,
            )

    async def get_history(self, whatsapp: str) -> List[AssignmentDetail]:
        """The client's last assignments, newest first."""
        normalized = normalize_whatsapp(whatsapp)

        async with self._uow_factory() as uow:
            client = await uow.clients.get_by_whatsapp(normalized) if normalized else None
            if not client:
                raise ClientNotFoundError(normalized)

            return await uow.assignments.get_history_for_client(  # type: ignore[no-any-return]
                client.id,
                limit=PUBLIC_HISTORY_LIMIT,
                newest_assigned_first=True,
            )
