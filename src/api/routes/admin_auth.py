"""Admin session routes: login, logout and session check."""

import structlog
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import ORJSONResponse

from api.dependencies.auth import OptionalAdmin, get_auth_provider
from api.schemas.auth import AuthStatusResponse, LoginRequest
from api.schemas.common import MessageResponse
from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from core.rate_limit import LOGIN_LIMIT, READ_LIMIT, limiter
from infrastructure.auth.jwt_provider import JWTAuthProvider

logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin-session"])


@router.post(
    "/login",
    response_model=MessageResponse,
    summary="Log into the admin panel",
    responses={
        200: {"description": "Session cookie set"},
        401: {"description": "Incorrect password"},
    },
)
@limiter.limit(LOGIN_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> MessageResponse:
    """Check the admin password and open a session stored in an HTTP-only cookie."""
    if not auth_provider.verify_password(body.password):
        logger.warning("admin_login_failed")
        raise AuthenticationError(
            message="Incorrect password.",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=auth_provider.create_token(),
        max_age=auth_provider.max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    logger.info("admin_login_succeeded")
    return MessageResponse(message="Login successful")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Close the admin session",
)
async def logout(response: Response) -> MessageResponse:
    """Clear the session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return MessageResponse(message="Session closed")


@router.get(
    "/auth-check",
    response_model=AuthStatusResponse,
    summary="Check whether the admin session is still valid",
    responses={401: {"description": "No valid session"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def auth_check(request: Request, admin: OptionalAdmin) -> ORJSONResponse:
    """Report the session state; 401 when not logged in."""
    authenticated = admin is not None
    return ORJSONResponse(
        status_code=status.HTTP_200_OK if authenticated else status.HTTP_401_UNAUTHORIZED,
        content=AuthStatusResponse(is_authenticated=authenticated).model_dump(by_alias=True),
    )
