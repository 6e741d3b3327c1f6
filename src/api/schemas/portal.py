"""Pydantic schemas for the public client portal."""

from datetime import datetime

from pydantic import ConfigDict

from api.schemas.common import CamelModel, UnstrippedStr
from domain.services.access_service import ClientAccess


class ClientAccessResponse(CamelModel):
    """Credentials of the client's active profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "clientName": "Ana",
                "email": "family@example.com",
                "password": "s3cret",
                "profileName": "P1",
                "pin": "1111",
                "expiryDate": "2026-02-27T10:00:00",
                "expiresOn": "27/02/2026",
            }
        },
    )

    client_name: str
    email: str
    password: UnstrippedStr
    profile_name: str
    pin: str
    expiry_date: datetime
    expires_on: str

    @classmethod
    def from_access(cls, access: ClientAccess) -> "ClientAccessResponse":
        return cls(
            client_name=access.client_name,
            email=access.email,
            password=access.password,
            profile_name=access.profile_name,
            pin=access.pin,
            expiry_date=access.expiry_date,
            expires_on=access.expires_on,
        )
