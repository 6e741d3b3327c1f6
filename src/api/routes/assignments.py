"""Assignment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import get_current_admin
from api.dependencies.services import get_assignment_service
from api.schemas.assignment import (
    AssignmentCreate,
    AssignmentRelease,
    AssignmentResponse,
    ReleaseResponse,
)
from api.schemas.common import MessageResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.assignment_service import AssignmentService

router = APIRouter(
    prefix="/admin/assignments",
    tags=["assignments"],
    dependencies=[Depends(get_current_admin)],
)


@router.post(
    "",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign a profile to a client",
    responses={
        201: {"description": "Assignment created, 30 days, paid"},
        400: {"description": "Client already has an active assignment"},
        404: {"description": "Account or profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_assignment(
    request: Request,
    body: AssignmentCreate,
    service: AssignmentService = Depends(get_assignment_service),
) -> AssignmentResponse:
    """
    Assign a profile slot for 30 days.

    Unknown WhatsApp numbers register a new client on the fly. When no PIN
    is given the profile's current PIN is used.
    """
    assignment = await service.create(
        client_name=body.client_name,
        client_whatsapp=body.client_whatsapp,
        account_id=body.account_id,
        profile_name=body.profile_name,
        pin=body.pin,
    )
    return AssignmentResponse.from_entity(assignment)


@router.delete(
    "/{assignment_id}",
    response_model=MessageResponse,
    summary="Delete an assignment",
    responses={404: {"description": "Assignment not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_assignment(
    request: Request,
    assignment_id: UUID,
    service: AssignmentService = Depends(get_assignment_service),
) -> MessageResponse:
    await service.delete(assignment_id)
    return MessageResponse(message="Assignment deleted")


@router.patch(
    "/{assignment_id}/renew",
    response_model=AssignmentResponse,
    summary="Renew an assignment for 30 days",
    responses={404: {"description": "Assignment not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def renew_assignment(
    request: Request,
    assignment_id: UUID,
    service: AssignmentService = Depends(get_assignment_service),
) -> AssignmentResponse:
    """New expiry is 30 days from now, not from the previous expiry."""
    assignment = await service.renew(assignment_id)
    return AssignmentResponse.from_entity(assignment)


@router.patch(
    "/{assignment_id}/payment",
    response_model=AssignmentResponse,
    summary="Toggle payment status",
    responses={404: {"description": "Assignment not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_assignment_payment(
    request: Request,
    assignment_id: UUID,
    service: AssignmentService = Depends(get_assignment_service),
) -> AssignmentResponse:
    assignment = await service.toggle_payment(assignment_id)
    return AssignmentResponse.from_entity(assignment)


@router.post(
    "/{assignment_id}/release",
    response_model=ReleaseResponse,
    summary="Change the profile PIN and free the slot",
    responses={404: {"description": "Assignment, account or profile not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def release_assignment(
    request: Request,
    assignment_id: UUID,
    body: AssignmentRelease | None = None,
    service: AssignmentService = Depends(get_assignment_service),
) -> ReleaseResponse:
    """Set a new PIN on the profile (random when omitted) and delete the assignment."""
    pin = await service.release(assignment_id, body.new_pin if body else None)
    return ReleaseResponse(message="Profile released", pin=pin)
