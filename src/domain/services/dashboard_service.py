"""Aggregated admin panel snapshot."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from domain.entities.assignment import AssignmentDetail, expiring_soon_cutoff
from domain.entities.client import Client
from domain.entities.service_account import ServiceAccount
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.slot_allocator import AccountAvailability, compute_availability_batch

EXPIRED_HISTORY_LIMIT = 50


@dataclass(frozen=True, slots=True)
class AccountOverview:
    """A service account with its slot availability."""

    account: ServiceAccount
    availability: AccountAvailability


@dataclass(frozen=True, slots=True)
class DashboardSnapshot:
    """Everything the admin panel renders, read in one transaction."""

    clients: List[Client]
    accounts: List[AccountOverview]
    active: List[AssignmentDetail]
    expired: List[AssignmentDetail]
    expiring_soon: List[AssignmentDetail]


class DashboardService:
    """Builds the admin overview straight from the store on every call."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_snapshot(self, now: Optional[datetime] = None) -> DashboardSnapshot:
        now = now or datetime.utcnow()

        async with self._uow_factory() as uow:
            clients = await uow.clients.get_all()
            accounts = await uow.accounts.get_all()
            active = await uow.assignments.get_all_active(now)
            expired = await uow.assignments.get_expired(now, EXPIRED_HISTORY_LIMIT)
            expiring = await uow.assignments.get_expiring_between(
                now, expiring_soon_cutoff(now)
            )

        availability = compute_availability_batch(
            accounts, [detail.assignment for detail in active]
        )
        return DashboardSnapshot(
            clients=clients,
            accounts=[
                AccountOverview(account=account, availability=availability[account.id])
                for account in accounts
            ],
            active=active,
            expired=expired,
            expiring_soon=expiring,
        )
