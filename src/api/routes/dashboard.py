"""Admin overview route."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import get_current_admin
from api.dependencies.services import get_dashboard_service
from api.schemas.dashboard import AdminDataResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.dashboard_service import DashboardService

router = APIRouter(
    prefix="/admin",
    tags=["dashboard"],
    dependencies=[Depends(get_current_admin)],
)


@router.get(
    "/data",
    response_model=AdminDataResponse,
    summary="Admin panel snapshot",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_admin_data(
    request: Request,
    service: DashboardService = Depends(get_dashboard_service),
) -> AdminDataResponse:
    """
    Clients, service accounts with slot availability, and assignments split
    into active, expired (latest 50) and expiring within 5 days.
    """
    snapshot = await service.get_snapshot()
    return AdminDataResponse.from_snapshot(snapshot)
