"""
User directory service: profile lookups and filtered listings.
"""
import logging
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.errors import NotFoundError
from app.core.policy import decide_directory_access, decide_profile_access
from app.database.databases import accounts_db
from app.models.user import User
from app.schemas.auth import SessionIdentity
from app.schemas.user import UserFilters, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Service for reading accounts."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with accounts database."""
        self.db = db
        self.users_collection = db[accounts_db.Collections.USERS]

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ObjectId as string

        Returns:
            User model or None if not found or the id is not an ObjectId
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        user_doc = await self.users_collection.find_one({"_id": object_id})
        if not user_doc:
            return None

        return User.from_document(user_doc)

    async def get_profile(
        self,
        identity: SessionIdentity,
        requested_id: Optional[str] = None,
    ) -> UserResponse:
        """
        Fetch the profile an identity is allowed to read.

        Admins get the requested account, everyone else gets their own.

        Raises:
            NotFoundError: If the resolved account does not exist
        """
        decision = decide_profile_access(identity, requested_id)
        user = await self.get_user_by_id(decision.target_id)
        if user is None:
            raise NotFoundError("User not found")
        return UserResponse.from_user(user)

    async def list_users(self, filters: Optional[UserFilters] = None) -> list[UserResponse]:
        """
        List accounts matching the filters, oldest first.

        Args:
            filters: Optional username/email substring and exact country filters

        Returns:
            Matching accounts without password hashes (possibly empty)
        """
        query = filters.to_query() if filters else {}
        cursor = self.users_collection.find(query, sort=[("created_at", 1)])
        docs = await cursor.to_list(length=None)
        return [UserResponse.from_user(User.from_document(doc)) for doc in docs]

    async def search_directory(
        self,
        identity: SessionIdentity,
        filters: Optional[UserFilters] = None,
    ) -> list[UserResponse]:
        """
        Filtered directory listing for Admin callers.

        Raises:
            ForbiddenError: If the caller is not an Admin
            NotFoundError: If nothing matches the filters
        """
        decide_directory_access(identity).enforce()

        users = await self.list_users(filters)
        if not users:
            raise NotFoundError("No users found")
        return users
