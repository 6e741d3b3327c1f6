"""Public client portal routes. No admin session required."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.services import get_access_service
from api.schemas.assignment import PublicHistoryItem
from api.schemas.portal import ClientAccessResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.access_service import AccessService

router = APIRouter(prefix="/client", tags=["client-portal"])


@router.get(
    "/access/{whatsapp}",
    response_model=ClientAccessResponse,
    summary="Credentials of the client's active profile",
    responses={
        404: {"description": "Unknown number or no active assignment"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_client_access(
    request: Request,
    whatsapp: str,
    service: AccessService = Depends(get_access_service),
) -> ClientAccessResponse:
    """
    Look up a client by WhatsApp number and return the login of the
    account behind the active assignment, with the decrypted password.
    """
    access = await service.get_access(whatsapp)
    return ClientAccessResponse.from_access(access)


@router.get(
    "/history/{whatsapp}",
    response_model=list[PublicHistoryItem],
    summary="Recent assignments of a client",
    responses={404: {"description": "Unknown number"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_client_public_history(
    request: Request,
    whatsapp: str,
    service: AccessService = Depends(get_access_service),
) -> list[PublicHistoryItem]:
    """Last 10 assignments, newest first. PINs are left out."""
    history = await service.get_history(whatsapp)
    return [PublicHistoryItem.from_detail(d) for d in history]
