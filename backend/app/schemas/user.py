"""
User request/response schemas.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.user import User, UserRole


class UserResponse(BaseModel):
    """Account information response (excludes the password hash)."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User email")
    phone: str = Field(..., description="Phone number")
    city: str = Field(..., description="City")
    country: str = Field(..., description="Country")
    role: UserRole = Field(..., description="Account role")
    created_at: datetime = Field(..., description="Account creation date")
    updated_at: datetime = Field(..., description="Last modification date")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump(exclude={"hashed_password"}))


class UserFilters(BaseModel):
    """Directory listing filters. All are optional and combined with AND."""
    username: Optional[str] = Field(
        None, description="Case-insensitive substring of the username"
    )
    email: Optional[str] = Field(
        None, description="Case-insensitive substring of the email"
    )
    country: Optional[str] = Field(None, description="Exact country")

    def to_query(self) -> dict:
        """Translate the filters into a MongoDB query document."""
        query: dict = {}
        if self.username:
            query["username"] = {"$regex": re.escape(self.username), "$options": "i"}
        if self.email:
            query["email"] = {"$regex": re.escape(self.email), "$options": "i"}
        if self.country:
            query["country"] = self.country
        return query
