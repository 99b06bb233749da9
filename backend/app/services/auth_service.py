"""
Authentication service for registration and login.
"""
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.config import get_settings
from app.core.errors import ConflictError, InternalError, InvalidCredentialsError
from app.core.policy import Scope, decide_login_payload
from app.core.security import (
    create_access_token,
    hash_password,
    pwd_context,
    verify_password,
)
from app.database.databases import accounts_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionIdentity,
)
from app.schemas.user import UserResponse
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with accounts database."""
        self.db = db
        self.users_collection = db[accounts_db.Collections.USERS]
        self.user_service = UserService(db)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """
        Register a new account.

        Args:
            request: Validated registration request

        Returns:
            The created account without its password hash

        Raises:
            ConflictError: If the username or email is already taken
            InternalError: If the account cannot be read back after insert
        """
        existing = await self.users_collection.find_one(
            {"$or": [{"username": request.username}, {"email": request.email}]}
        )
        if existing:
            raise ConflictError()

        now = datetime.now(timezone.utc)
        user_doc = {
            "username": request.username,
            "email": request.email,
            "phone": request.phone,
            "hashed_password": hash_password(request.password),
            "city": request.city,
            "country": request.country,
            "role": request.role.value,
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race against a concurrent registration
            raise ConflictError()

        created = await self.user_service.get_user_by_id(str(result.inserted_id))
        if created is None:
            raise InternalError("Something went wrong while registering the user")

        logger.info(f"Registered {created.role} account {created.username} ({created.id})")
        return UserResponse.from_user(created)

    async def authenticate(self, identifier: str, password: str) -> User:
        """
        Verify credentials against the store.

        Unknown identifiers and wrong passwords fail the same way.

        Raises:
            InvalidCredentialsError: If the credentials do not match an account
        """
        identifier = identifier.strip()
        user_doc = await self.users_collection.find_one(
            {"$or": [{"username": identifier}, {"email": identifier.lower()}]}
        )

        if not user_doc:
            # Burn a hash so unknown identifiers take as long as bad passwords
            pwd_context.dummy_verify()
            logger.info(f"Failed login for {identifier!r}: unknown identifier")
            raise InvalidCredentialsError()

        if not verify_password(password, user_doc.get("hashed_password", "")):
            logger.info(f"Failed login for {identifier!r}: bad password")
            raise InvalidCredentialsError()

        return User.from_document(user_doc)

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Authenticate and issue a session token.

        Args:
            request: Login request with identifier and password

        Returns:
            LoginResponse with the token and the account data the caller may see

        Raises:
            InvalidCredentialsError: If the credentials are invalid
        """
        user = await self.authenticate(request.identifier, request.password)
        identity = SessionIdentity(id=user.id, role=user.role)

        access_token = create_access_token(user_id=user.id, role=identity.role.value)
        response = LoginResponse(
            access_token=access_token,
            expires_in=self.settings.token_expire_seconds,
            role=identity.role,
        )

        decision = decide_login_payload(identity)
        if decision.scope == Scope.DIRECTORY and self.settings.login_includes_directory:
            response.users = await self.user_service.list_users()
        else:
            response.user = UserResponse.from_user(user)

        logger.info(f"{identity.role.value} {user.username} logged in")
        return response
