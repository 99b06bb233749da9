"""
Account model for the accounts database.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Account role levels."""
    ADMIN = "Admin"
    STAFF = "Staff"


class User(BaseModel):
    """
    Account document model for MongoDB accounts_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Unique email address (lower-cased)")
    phone: str = Field(..., description="10-digit phone number")
    hashed_password: str = Field(..., description="Bcrypt hashed password")
    city: str = Field(..., description="City")
    country: str = Field(..., description="Country")
    role: UserRole = Field(default=UserRole.STAFF, description="Account role")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Account creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp"
    )

    class Config:
        populate_by_name = True
        use_enum_values = True

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        """Build a User from a raw MongoDB document."""
        doc = dict(doc)
        doc["_id"] = str(doc["_id"])
        return cls(**doc)