"""Pydantic schemas for Assignment API."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from api.schemas.common import CamelModel
from domain.entities.assignment import (
    Assignment,
    AssignmentDetail,
    AssignmentState,
    PaymentStatus,
)


class AssignmentCreate(CamelModel):
    """Schema for assigning a profile slot to a (possibly new) client."""

    client_name: str = Field(..., min_length=1, max_length=255)
    client_whatsapp: str = Field(..., min_length=1, max_length=40)
    account_id: UUID
    profile_name: str = Field(..., min_length=1, max_length=100)
    pin: str | None = Field(None, max_length=20)


class AssignmentRelease(CamelModel):
    """Schema for freeing a profile. An omitted PIN is generated."""

    new_pin: str | None = Field(None, pattern=r"^\d{4}$")


class ReleaseResponse(CamelModel):
    """Result of a release."""

    message: str
    pin: str


class ClientSummary(CamelModel):
    """Client labels embedded in an assignment."""

    id: UUID
    name: str | None = None
    whatsapp: str | None = None


class AccountSummary(CamelModel):
    """Account labels embedded in an assignment."""

    id: UUID
    name: str | None = None
    email: str | None = None


class AssignmentResponse(CamelModel):
    """Schema for Assignment response."""

    id: UUID
    client_id: UUID
    service_account_id: UUID
    profile_name: str
    pin: str
    assigned_date: datetime
    expiry_date: datetime
    payment_status: PaymentStatus
    state: AssignmentState
    client: ClientSummary | None = None
    service_account: AccountSummary | None = None

    @classmethod
    def from_entity(cls, assignment: Assignment) -> "AssignmentResponse":
        return cls(
            id=assignment.id,
            client_id=assignment.client_id,
            service_account_id=assignment.service_account_id,
            profile_name=assignment.profile_name,
            pin=assignment.pin,
            assigned_date=assignment.assigned_date,
            expiry_date=assignment.expiry_date,
            payment_status=assignment.payment_status,
            state=assignment.state(),
        )

    @classmethod
    def from_detail(cls, detail: AssignmentDetail) -> "AssignmentResponse":
        response = cls.from_entity(detail.assignment)
        response.client = ClientSummary(
            id=detail.assignment.client_id,
            name=detail.client_name,
            whatsapp=detail.client_whatsapp,
        )
        response.service_account = AccountSummary(
            id=detail.assignment.service_account_id,
            name=detail.account_name,
            email=detail.account_email,
        )
        return response


class PublicHistoryItem(CamelModel):
    """Assignment history entry shown to clients (no PIN)."""

    id: UUID
    account_name: str | None = None
    profile_name: str
    assigned_date: datetime
    expiry_date: datetime
    payment_status: PaymentStatus
    state: AssignmentState

    @classmethod
    def from_detail(cls, detail: AssignmentDetail) -> "PublicHistoryItem":
        assignment = detail.assignment
        return cls(
            id=assignment.id,
            account_name=detail.account_name,
            profile_name=assignment.profile_name,
            assigned_date=assignment.assigned_date,
            expiry_date=assignment.expiry_date,
            payment_status=assignment.payment_status,
            state=assignment.state(),
        )
