"""Service account API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import get_current_admin
from api.dependencies.services import get_account_service
from api.schemas.common import MessageResponse
from api.schemas.service_account import (
    PasswordResponse,
    ProfilePinUpdate,
    ServiceAccountCreate,
    ServiceAccountResponse,
    ServiceAccountUpdate,
    SlotAvailabilityResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.account_service import ServiceAccountService

router = APIRouter(
    prefix="/admin/accounts",
    tags=["service-accounts"],
    dependencies=[Depends(get_current_admin)],
)


@router.post(
    "",
    response_model=ServiceAccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a service account",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Name or email already in use"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_account(
    request: Request,
    body: ServiceAccountCreate,
    service: ServiceAccountService = Depends(get_account_service),
) -> ServiceAccountResponse:
    """Create an account. The password is stored encrypted."""
    account = await service.create(
        name=body.name,
        email=body.email,
        password=body.password,
        profiles=[p.to_entity() for p in body.profiles],
    )
    return ServiceAccountResponse.from_entity(account)


@router.put(
    "/{account_id}",
    response_model=ServiceAccountResponse,
    summary="Update a service account",
    responses={
        404: {"description": "Account not found"},
        400: {"description": "Name or email already in use"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_account(
    request: Request,
    account_id: UUID,
    body: ServiceAccountUpdate,
    service: ServiceAccountService = Depends(get_account_service),
) -> ServiceAccountResponse:
    """Update an account. Leave the password out to keep the current one."""
    account = await service.update(
        account_id,
        name=body.name,
        email=body.email,
        password=body.password,
        profiles=[p.to_entity() for p in body.profiles] if body.profiles is not None else None,
    )
    return ServiceAccountResponse.from_entity(account)


@router.get(
    "/{account_id}/password",
    response_model=PasswordResponse,
    summary="Reveal the account password",
    responses={404: {"description": "Account not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_account_password(
    request: Request,
    account_id: UUID,
    service: ServiceAccountService = Depends(get_account_service),
) -> PasswordResponse:
    password = await service.reveal_password(account_id)
    return PasswordResponse(password=password)


@router.get(
    "/{account_id}/slots",
    response_model=SlotAvailabilityResponse,
    summary="Profile slot availability",
    responses={404: {"description": "Account not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_account_slots(
    request: Request,
    account_id: UUID,
    service: ServiceAccountService = Depends(get_account_service),
) -> SlotAvailabilityResponse:
    """Which profiles are taken by an active assignment and how many are free."""
    availability = await service.get_availability(account_id)
    return SlotAvailabilityResponse.from_availability(availability)


@router.patch(
    "/{account_id}/status",
    response_model=ServiceAccountResponse,
    summary="Toggle account status",
    responses={404: {"description": "Account not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_account_status(
    request: Request,
    account_id: UUID,
    service: ServiceAccountService = Depends(get_account_service),
) -> ServiceAccountResponse:
    """Switch between Active and Inactive."""
    account = await service.toggle_status(account_id)
    return ServiceAccountResponse.from_entity(account)


@router.patch(
    "/{account_id}/profiles",
    response_model=MessageResponse,
    summary="Change a profile PIN",
    responses={404: {"description": "Account or profile not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile_pin(
    request: Request,
    account_id: UUID,
    body: ProfilePinUpdate,
    service: ServiceAccountService = Depends(get_account_service),
) -> MessageResponse:
    await service.update_profile_pin(account_id, body.profile_name, body.new_pin)
    return MessageResponse(message="PIN updated")


@router.delete(
    "/{account_id}",
    response_model=MessageResponse,
    summary="Delete a service account",
    responses={404: {"description": "Account not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    account_id: UUID,
    service: ServiceAccountService = Depends(get_account_service),
) -> MessageResponse:
    """Delete the account along with every assignment on it."""
    removed = await service.delete(account_id)
    return MessageResponse(
        message=f"Account deleted along with {removed} assignment(s)"
    )
