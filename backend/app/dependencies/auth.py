"""
Authentication dependencies for route protection.
"""
from typing import Annotated, Optional

from fastapi import Depends, Request
from jose import JWTError
from pydantic import ValidationError as PydanticValidationError

from app.config import get_settings
from app.core.errors import UnauthenticatedError
from app.core.security import decode_token
from app.schemas.auth import SessionIdentity, TokenPayload


def get_session_token(request: Request) -> Optional[str]:
    """Read the session token from its cookie, if any."""
    settings = get_settings()
    return request.cookies.get(settings.session_cookie_name) or None


def resolve_identity(token: str) -> SessionIdentity:
    """
    Resolve the calling identity from a session token.

    Raises:
        UnauthenticatedError: If the token is expired, malformed, badly signed
            or carries an unknown role
    """
    try:
        payload = TokenPayload(**decode_token(token))
    except (JWTError, PydanticValidationError, TypeError):
        raise UnauthenticatedError("Invalid or expired session")

    return SessionIdentity(id=payload.sub, role=payload.role)


async def get_current_identity(
    token: Annotated[Optional[str], Depends(get_session_token)],
) -> SessionIdentity:
    """
    Dependency to get the current identity from the session cookie.

    The token is stateless: the identity is taken from its claims without a
    database round trip.

    Raises:
        UnauthenticatedError: If the cookie is missing or the token is invalid
    """
    if not token:
        raise UnauthenticatedError("Login first")
    return resolve_identity(token)


async def get_optional_identity(
    token: Annotated[Optional[str], Depends(get_session_token)],
) -> Optional[SessionIdentity]:
    """Like get_current_identity, but returns None instead of raising."""
    if not token:
        return None
    try:
        return resolve_identity(token)
    except UnauthenticatedError:
        return None


# Type alias for cleaner route signatures
CurrentIdentity = Annotated[SessionIdentity, Depends(get_current_identity)]
