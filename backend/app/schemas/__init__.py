"""
Request and response schemas for API endpoints.
"""
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionIdentity,
    TokenPayload,
)
from app.schemas.common import ApiResponse
from app.schemas.user import UserFilters, UserResponse

__all__ = [
    # Envelope
    "ApiResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "SessionIdentity",
    "TokenPayload",
    # User
    "UserFilters",
    "UserResponse",
]
