"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import AdminSession

# Bearer scheme for OpenAPI docs and API clients; browsers use the cookie
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


def _candidate_tokens(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> list[str]:
    """Session cookie first, then Authorization: Bearer."""
    tokens = []
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        tokens.append(cookie)
    if credentials and credentials.credentials:
        tokens.append(credentials.credentials)
    return tokens


async def _resolve_session(
    tokens: list[str], auth_provider: JWTAuthProvider
) -> AdminSession | None:
    """First token that validates; a stale cookie falls through to the header."""
    for token in tokens:
        session = await auth_provider.validate_token(token)
        if session:
            return session
    return None


async def get_current_admin(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> AdminSession:
    """
    Dependency guarding the admin endpoints.

    Raises:
        AuthenticationError: If no session is present or it is invalid/expired
    """
    tokens = _candidate_tokens(request, credentials)
    if not tokens:
        raise AuthenticationError()

    session = await _resolve_session(tokens, auth_provider)
    if not session:
        raise AuthenticationError(
            message="Session expired or invalid. Please log in again.",
            error_code=ErrorCode.INVALID_SESSION,
        )

    return session


async def get_optional_admin(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> AdminSession | None:
    """
    Dependency returning the admin session if present.

    Returns:
        AdminSession if authenticated, None otherwise (no exception raised)
    """
    return await _resolve_session(_candidate_tokens(request, credentials), auth_provider)


OptionalAdmin = Annotated[AdminSession | None, Depends(get_optional_admin)]
