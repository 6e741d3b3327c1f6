"""Unit tests for profile slot availability."""

from datetime import datetime
from uuid import uuid4

from domain.entities.assignment import Assignment
from domain.entities.service_account import Profile, ServiceAccount
from domain.services.slot_allocator import (
    compute_availability,
    compute_availability_batch,
    is_slot_occupied,
)

NOW = datetime(2026, 3, 1, 12, 0, 0)


def _account(*names: str) -> ServiceAccount:
    return ServiceAccount(
        name="Netflix1",
        email="family@example.com",
        password="cipher",
        profiles=[Profile(name, "0000") for name in names],
    )


def _active_on(account: ServiceAccount, profile_name: str) -> Assignment:
    return Assignment.start(uuid4(), account.id, profile_name, "0000", now=NOW)


class TestComputeAvailability:
    def test_one_active_assignment_takes_one_slot(self):
        account = _account("A", "B", "C")

        availability = compute_availability(account, [_active_on(account, "B")])

        assert availability.total_profiles == 3
        assert availability.available == 2
        assert availability.occupied_names == {"B"}
        assert [s.occupied for s in availability.slots] == [False, True, False]

    def test_no_assignments_leaves_every_slot_free(self):
        availability = compute_availability(_account("A", "B"), [])

        assert availability.available == 2
        assert availability.occupied_names == set()

    def test_ignores_assignments_of_other_accounts(self):
        account = _account("A")
        other = _account("A")

        availability = compute_availability(account, [_active_on(other, "A")])

        assert availability.available == 1

    def test_account_without_profiles(self):
        availability = compute_availability(_account(), [])

        assert availability.total_profiles == 0
        assert availability.available == 0
        assert availability.slots == []

    def test_double_booking_is_not_clamped(self):
        account = _account("A")

        availability = compute_availability(
            account, [_active_on(account, "A"), _active_on(account, "A")]
        )

        assert availability.available == -1

    def test_duplicate_profile_names_are_separate_slots(self):
        account = _account("A", "A")

        availability = compute_availability(account, [_active_on(account, "A")])

        assert len(availability.slots) == 2
        assert all(slot.occupied for slot in availability.slots)
        assert availability.available == 1

    def test_slots_carry_profile_pins(self):
        account = ServiceAccount(
            name="Max",
            email="max@example.com",
            password="cipher",
            profiles=[Profile("Kids", "4321")],
        )

        slot = compute_availability(account, []).slots[0]

        assert (slot.name, slot.pin, slot.occupied) == ("Kids", "4321", False)


class TestComputeAvailabilityBatch:
    def test_groups_assignments_by_account(self):
        first = _account("A", "B")
        second = _account("X")
        active = [_active_on(first, "A"), _active_on(second, "X")]

        result = compute_availability_batch([first, second], active)

        assert result[first.id].available == 1
        assert result[second.id].available == 0

    def test_accounts_without_assignments_are_included(self):
        account = _account("A")

        result = compute_availability_batch([account], [])

        assert result[account.id].available == 1


class TestIsSlotOccupied:
    def test_detects_taken_profile(self):
        account = _account("A", "B")
        active = [_active_on(account, "A")]

        assert is_slot_occupied(account, "A", active)
        assert not is_slot_occupied(account, "B", active)

    def test_same_name_on_another_account_does_not_count(self):
        account = _account("A")
        other = _account("A")

        assert not is_slot_occupied(account, "A", [_active_on(other, "A")])

