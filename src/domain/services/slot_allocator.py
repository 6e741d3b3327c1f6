"""Profile slot availability, recomputed from active assignments on every read."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from domain.entities.assignment import Assignment
from domain.entities.service_account import ServiceAccount


@dataclass(frozen=True, slots=True)
class ProfileSlot:
    """A profile of an account together with its occupancy."""

    name: str
    pin: str
    occupied: bool


@dataclass(frozen=True, slots=True)
class AccountAvailability:
    """Slot summary for one service account."""

    account_id: UUID
    total_profiles: int
    available: int
    slots: list[ProfileSlot]

    @property
    def occupied_names(self) -> set[str]:
        return {slot.name for slot in self.slots if slot.occupied}


def compute_availability(
    account: ServiceAccount, active_assignments: Iterable[Assignment]
) -> AccountAvailability:
    """Compute free and taken slots of ``account``.

    ``active_assignments`` may contain assignments of other accounts; only
    the ones pointing at ``account`` are counted. ``available`` is
    ``len(profiles) - active assignments on this account`` and is not
    clamped, so a double-booked account reports fewer (possibly negative)
    free slots. Duplicate profile names are kept as separate slots.
    """
    own = [a for a in active_assignments if a.service_account_id == account.id]
    taken = {a.profile_name for a in own}

    slots = [
        ProfileSlot(name=profile.name, pin=profile.pin, occupied=profile.name in taken)
        for profile in account.profiles
    ]
    return AccountAvailability(
        account_id=account.id,
        total_profiles=account.total_profiles,
        available=account.total_profiles - len(own),
        slots=slots,
    )


def compute_availability_batch(
    accounts: Iterable[ServiceAccount], active_assignments: Iterable[Assignment]
) -> dict[UUID, AccountAvailability]:
    """Availability for many accounts from one list of active assignments."""
    by_account: dict[UUID, list[Assignment]] = {}
    for assignment in active_assignments:
        by_account.setdefault(assignment.service_account_id, []).append(assignment)

    return {
        account.id: compute_availability(account, by_account.get(account.id, []))
        for account in accounts
    }


def is_slot_occupied(
    account: ServiceAccount, profile_name: str, active_assignments: Iterable[Assignment]
) -> bool:
    """True if an active assignment on ``account`` already uses ``profile_name``."""
    return any(
        a.service_account_id == account.id and a.profile_name == profile_name
        for a in active_assignments
    )
