"""
Authentication request/response schemas.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.user import UserResponse

PHONE_PATTERN = re.compile(r"[0-9]{10}")


class LoginRequest(BaseModel):
    """Login request body. The identifier is a username or an email."""
    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "username", "email"),
        description="Username or email address",
    )
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """
    Login response with the session token.

    Staff callers get their own record in ``user``; Admin callers get the
    account directory in ``users``.
    """
    access_token: str = Field(..., description="JWT session token")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    role: UserRole = Field(..., description="Authenticated account role")
    user: Optional[UserResponse] = Field(None, description="Caller's own account")
    users: Optional[list[UserResponse]] = Field(None, description="Account directory")


class RegisterRequest(BaseModel):
    """Registration request body."""
    email: EmailStr = Field(..., description="User email address")
    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="User password")
    role: UserRole = Field(default=UserRole.STAFF, description="Admin or Staff")
    phone: str = Field(..., description="10-digit phone number")
    city: str = Field(..., description="City")
    country: str = Field(..., description="Country")

    @field_validator(
        "email", "username", "password", "phone", "city", "country", mode="before"
    )
    @classmethod
    def required(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("All fields are required")
        return value

    @field_validator("username", "city", "country")
    @classmethod
    def strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, value: str) -> str:
        if not PHONE_PATTERN.fullmatch(value):
            raise ValueError("Invalid phone number. It must be 10 digits")
        return value


class TokenPayload(BaseModel):
    """Decoded JWT token payload."""
    sub: str = Field(..., description="Subject (user ID)")
    role: UserRole = Field(..., description="Account role")
    exp: datetime = Field(..., description="Expiration time")
    iat: Optional[datetime] = Field(None, description="Issued at time")


class SessionIdentity(BaseModel):
    """Identity resolved from a valid session token."""
    id: str = Field(..., description="Account ID")
    role: UserRole = Field(..., description="Account role")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
