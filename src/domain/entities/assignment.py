"""Assignment domain entity and lifecycle rules."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID, uuid4


class PaymentStatus(StrEnum):
    """Payment state of an assignment."""

    PAID = "Paid"
    PENDING = "Pending"


class AssignmentState(StrEnum):
    """Lifecycle classification derived from the expiry date.

    EXPIRING_SOON is a view over active assignments, never stored.
    """

    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


# Every assignment and renewal runs for 30 days from "now"
ASSIGNMENT_PERIOD_DAYS = 30

# Active assignments ending within this window are "expiring soon"
EXPIRING_SOON_DAYS = 5


def expiring_soon_cutoff(now: datetime) -> datetime:
    """Latest expiry date still considered expiring soon at ``now``."""
    return now + timedelta(days=EXPIRING_SOON_DAYS)


@dataclass
class Assignment:
    """Time-boxed grant of one profile slot of one account to one client.

    The profile is referenced by name; ``pin`` is a snapshot taken when the
    assignment was created.
    """

    client_id: UUID
    service_account_id: UUID
    profile_name: str
    pin: str
    expiry_date: datetime
    id: UUID = field(default_factory=uuid4)
    assigned_date: datetime = field(default_factory=datetime.utcnow)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def start(
        cls,
        client_id: UUID,
        service_account_id: UUID,
        profile_name: str,
        pin: str,
        now: datetime | None = None,
    ) -> "Assignment":
        """Open a new paid assignment running for ASSIGNMENT_PERIOD_DAYS."""
        now = now or datetime.utcnow()
        return cls(
            client_id=client_id,
            service_account_id=service_account_id,
            profile_name=profile_name,
            pin=pin,
            assigned_date=now,
            expiry_date=now + timedelta(days=ASSIGNMENT_PERIOD_DAYS),
            payment_status=PaymentStatus.PAID,
            created_at=now,
            updated_at=now,
        )

    def is_active(self, now: datetime | None = None) -> bool:
        """Active while the expiry date has not passed."""
        now = now or datetime.utcnow()
        return self.expiry_date >= now

    def is_expired(self, now: datetime | None = None) -> bool:
        return not self.is_active(now)

    def is_expiring_soon(self, now: datetime | None = None) -> bool:
        """Active and ending within EXPIRING_SOON_DAYS."""
        now = now or datetime.utcnow()
        return self.is_active(now) and self.expiry_date <= expiring_soon_cutoff(now)

    def state(self, now: datetime | None = None) -> AssignmentState:
        now = now or datetime.utcnow()
        if self.is_expired(now):
            return AssignmentState.EXPIRED
        if self.is_expiring_soon(now):
            return AssignmentState.EXPIRING_SOON
        return AssignmentState.ACTIVE

    def renew(self, now: datetime | None = None) -> None:
        """Restart the period from ``now`` and mark as paid.

        The new expiry is anchored to the renewal moment, not added to the
        previous expiry date.
        """
        now = now or datetime.utcnow()
        self.expiry_date = now + timedelta(days=ASSIGNMENT_PERIOD_DAYS)
        self.payment_status = PaymentStatus.PAID
        self.updated_at = now

    def toggle_payment(self) -> PaymentStatus:
        """Flip between Paid and Pending."""
        self.payment_status = (
            PaymentStatus.PENDING
            if self.payment_status == PaymentStatus.PAID
            else PaymentStatus.PAID
        )
        self.updated_at = datetime.utcnow()
        return self.payment_status


@dataclass(frozen=True, slots=True)
class AssignmentDetail:
    """Read-only value object: an Assignment with its client and account labels."""

    assignment: Assignment
    client_name: str | None = None
    client_whatsapp: str | None = None
    account_name: str | None = None
    account_email: str | None = None
