"""Service account domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class AccountStatus(StrEnum):
    """Whether a streaming account is in use."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass
class Profile:
    """A named seat with a PIN inside a service account.

    Value object: it has no identity of its own and lives and dies with
    the account that holds it.
    """

    name: str
    pin: str


@dataclass
class ServiceAccount:
    """Domain entity for a streaming service account.

    ``password`` always holds ciphertext produced by the credential vault.
    """

    name: str
    email: str
    password: str
    profiles: list[Profile] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    status: AccountStatus = AccountStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def total_profiles(self) -> int:
        return len(self.profiles)

    def find_profile(self, name: str) -> Profile | None:
        """Return the first profile with the given name, if any."""
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    def update_pin(self, profile_name: str, new_pin: str) -> bool:
        """Set a new PIN on a profile. Returns False if the profile is unknown."""
        profile = self.find_profile(profile_name)
        if profile is None:
            return False
        profile.pin = new_pin
        self.updated_at = datetime.utcnow()
        return True

    def toggle_status(self) -> AccountStatus:
        """Flip between Active and Inactive."""
        self.status = (
            AccountStatus.INACTIVE
            if self.status == AccountStatus.ACTIVE
            else AccountStatus.ACTIVE
        )
        self.updated_at = datetime.utcnow()
        return self.status
