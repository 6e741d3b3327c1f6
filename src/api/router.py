"""API router configuration."""

from fastapi import APIRouter

from api.routes.accounts import router as accounts_router
from api.routes.admin_auth import router as admin_auth_router
from api.routes.assignments import router as assignments_router
from api.routes.client_portal import router as client_portal_router
from api.routes.clients import router as clients_router
from api.routes.dashboard import router as dashboard_router

router = APIRouter()
router.include_router(admin_auth_router)
router.include_router(dashboard_router)
router.include_router(accounts_router)
router.include_router(clients_router)
router.include_router(assignments_router)
router.include_router(client_portal_router)
