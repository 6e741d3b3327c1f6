"""Client API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import get_current_admin
from api.dependencies.services import get_client_service
from api.schemas.assignment import AssignmentResponse
from api.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from api.schemas.common import MessageResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.client_service import ClientService

router = APIRouter(
    prefix="/admin/clients",
    tags=["clients"],
    dependencies=[Depends(get_current_admin)],
)


@router.get(
    "/search",
    response_model=list[ClientResponse],
    summary="Search clients by name or number",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def search_clients(
    request: Request,
    term: str = Query("", max_length=100),
    service: ClientService = Depends(get_client_service),
) -> list[ClientResponse]:
    """Up to 5 matches. Terms shorter than 2 characters return nothing."""
    clients = await service.search(term)
    return [ClientResponse.from_entity(c) for c in clients]


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a client",
    responses={
        201: {"description": "Client created"},
        400: {"description": "Number missing or already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_client(
    request: Request,
    body: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    """Register a client. The WhatsApp number is normalized before storage."""
    client = await service.create(name=body.name, whatsapp=body.whatsapp, notes=body.notes)
    return ClientResponse.from_entity(client)


@router.put(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
    responses={404: {"description": "Client not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_client(
    request: Request,
    client_id: UUID,
    body: ClientUpdate,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    client = await service.update(
        client_id,
        name=body.name,
        whatsapp=body.whatsapp,
        notes=body.notes,
    )
    return ClientResponse.from_entity(client)


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Delete a client",
    responses={404: {"description": "Client not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_client(
    request: Request,
    client_id: UUID,
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    """Delete the client and its whole assignment history."""
    removed = await service.delete(client_id)
    return MessageResponse(
        message=f"Client deleted along with {removed} assignment(s)"
    )


@router.get(
    "/{client_id}/history",
    response_model=list[AssignmentResponse],
    summary="Assignment history of a client",
    responses={404: {"description": "Client not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_client_history(
    request: Request,
    client_id: UUID,
    service: ClientService = Depends(get_client_service),
) -> list[AssignmentResponse]:
    history = await service.get_history(client_id)
    return [AssignmentResponse.from_detail(d) for d in history]
