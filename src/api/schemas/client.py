"""Pydantic schemas for Client API."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from api.schemas.common import CamelModel
from domain.entities.client import Client


class ClientCreate(CamelModel):
    """Schema for creating a Client."""

    name: str = Field(..., min_length=1, max_length=255)
    whatsapp: str = Field(..., min_length=1, max_length=40)
    notes: str = Field("", max_length=5000)


class ClientUpdate(CamelModel):
    """Schema for updating a Client."""

    name: str | None = Field(None, min_length=1, max_length=255)
    whatsapp: str | None = Field(None, min_length=1, max_length=40)
    notes: str | None = Field(None, max_length=5000)


class ClientResponse(CamelModel):
    """Schema for Client response."""

    id: UUID
    name: str
    whatsapp: str
    notes: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            name=client.name,
            whatsapp=client.whatsapp,
            notes=client.notes,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )
