"""Pydantic schemas for ServiceAccount API."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from api.schemas.common import CamelModel, UnstrippedStr
from domain.entities.service_account import AccountStatus, Profile, ServiceAccount
from domain.services.slot_allocator import AccountAvailability


class ProfileSchema(CamelModel):
    """A profile slot (name + PIN)."""

    name: str = Field(..., min_length=1, max_length=100)
    pin: str = Field(..., min_length=1, max_length=20)

    def to_entity(self) -> Profile:
        return Profile(name=self.name, pin=self.pin)


def _normalize_email(v: str) -> str:
    """Basic email validation."""
    v = v.strip().lower()
    if "@" not in v or "." not in v.split("@")[-1]:
        raise ValueError("Invalid email address")
    return v


class ServiceAccountCreate(CamelModel):
    """Schema for creating a ServiceAccount."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: UnstrippedStr = Field(..., min_length=1, max_length=255)
    profiles: list[ProfileSchema] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)


class ServiceAccountUpdate(CamelModel):
    """Schema for updating a ServiceAccount. Omitted password keeps the current one."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=3, max_length=255)
    password: UnstrippedStr | None = Field(None, min_length=1, max_length=255)
    profiles: list[ProfileSchema] | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return _normalize_email(v) if v is not None else None


class ProfilePinUpdate(CamelModel):
    """Schema for changing the PIN of one profile."""

    profile_name: str = Field(..., min_length=1, max_length=100)
    new_pin: str = Field(..., min_length=1, max_length=20)


class ProfileSlotResponse(CamelModel):
    """A profile with its occupancy."""

    name: str
    pin: str
    occupied: bool = False


class SlotAvailabilityResponse(CamelModel):
    """Schema for slot availability of one account."""

    account_id: UUID
    total_profiles: int
    available_slots: int
    slots: list[ProfileSlotResponse]

    @classmethod
    def from_availability(cls, availability: AccountAvailability) -> "SlotAvailabilityResponse":
        return cls(
            account_id=availability.account_id,
            total_profiles=availability.total_profiles,
            available_slots=availability.available,
            slots=[
                ProfileSlotResponse(name=s.name, pin=s.pin, occupied=s.occupied)
                for s in availability.slots
            ],
        )


class ServiceAccountResponse(CamelModel):
    """Schema for ServiceAccount response. The password is never included."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "name": "Netflix1",
                "email": "family@example.com",
                "profiles": [{"name": "P1", "pin": "1111", "occupied": True}],
                "status": "Active",
                "totalProfiles": 1,
                "availableSlots": 0,
                "createdAt": "2026-01-28T10:00:00",
                "updatedAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    profiles: list[ProfileSlotResponse]
    status: AccountStatus
    total_profiles: int
    available_slots: int | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls,
        account: ServiceAccount,
        availability: AccountAvailability | None = None,
    ) -> "ServiceAccountResponse":
        if availability is not None:
            profiles = [
                ProfileSlotResponse(name=s.name, pin=s.pin, occupied=s.occupied)
                for s in availability.slots
            ]
        else:
            profiles = [ProfileSlotResponse(name=p.name, pin=p.pin) for p in account.profiles]
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            profiles=profiles,
            status=account.status,
            total_profiles=account.total_profiles,
            available_slots=availability.available if availability else None,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class PasswordResponse(CamelModel):
    """Decrypted account password."""

    password: UnstrippedStr
