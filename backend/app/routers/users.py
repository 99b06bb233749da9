"""
Accounts router: registration, login, profiles, directory listing and logout.
"""
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.config import get_settings
from app.database.connections import get_database
from app.database.databases import accounts_db
from app.dependencies.auth import CurrentIdentity, get_optional_identity
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionIdentity,
)
from app.schemas.common import ApiResponse
from app.schemas.user import UserFilters, UserResponse
from app.services.auth_service import AuthService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


async def get_auth_service() -> AuthService:
    """Dependency to get AuthService instance."""
    db = await get_database(accounts_db.DB_NAME)
    return AuthService(db)


async def get_user_service() -> UserService:
    """Dependency to get UserService instance."""
    db = await get_database(accounts_db.DB_NAME)
    return UserService(db)


def set_session_cookie(response: Response, token: str) -> None:
    """
    Write the session token as an httpOnly cookie.

    max_age matches the token lifetime so both expire together. The secure
    flag is only set in production.
    """
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
        max_age=settings.token_expire_seconds,
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new account.

    - **email**: Valid email address (unique, case-insensitive)
    - **username**: Unique username
    - **password**: Password
    - **role**: `Admin` or `Staff` (default `Staff`)
    - **phone**: 10 digits
    - **city**, **country**: Free text
    """
    user = await auth_service.register_user(body)
    return ApiResponse.ok(
        user, "User registered successfully", status_code=status.HTTP_201_CREATED
    )


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Login and get a session token",
)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with a username or email and a password.

    The token is returned in the body and set as the session cookie, which
    must be sent back on protected endpoints.
    """
    result = await auth_service.login(body)
    set_session_cookie(response, result.access_token)
    return ApiResponse.ok(result, f"{result.role.value} logged in successfully")


@router.get(
    "/getme",
    response_model=ApiResponse[UserResponse],
    summary="Get current user info",
)
async def get_me(
    identity: CurrentIdentity,
    user_service: UserService = Depends(get_user_service),
):
    """Get the account of the currently authenticated caller."""
    user = await user_service.get_profile(identity)
    return ApiResponse.ok(user, "Your details retrieved successfully")


@router.get(
    "/users",
    response_model=ApiResponse[list[UserResponse]],
    summary="List and filter users (Admin only)",
)
async def list_users(
    identity: CurrentIdentity,
    name: Annotated[Optional[str], Query(description="Username substring")] = None,
    username: Annotated[Optional[str], Query(description="Username substring")] = None,
    email: Annotated[Optional[str], Query(description="Email substring")] = None,
    country: Annotated[Optional[str], Query(description="Exact country")] = None,
    user_service: UserService = Depends(get_user_service),
):
    """
    Search the account directory.

    Username and email match case-insensitive substrings, country matches
    exactly. Returns 404 when nothing matches.
    """
    filters = UserFilters(username=username or name, email=email, country=country)
    users = await user_service.search_directory(identity, filters)
    return ApiResponse.ok(users, "Users retrieved successfully")


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="Clear the session",
)
async def logout(
    response: Response,
    identity: Annotated[Optional[SessionIdentity], Depends(get_optional_identity)],
):
    """Clear the session cookie. Succeeds whether or not a session exists."""
    clear_session_cookie(response)
    if identity is not None:
        logger.info(f"Account {identity.id} logged out")
    return ApiResponse.ok(None, "User logged out successfully")


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Get a user by ID",
)
async def get_user(
    user_id: str,
    identity: CurrentIdentity,
    user_service: UserService = Depends(get_user_service),
):
    """
    Get an account by ID.

    Admins get the requested account. Staff callers always get their own.
    """
    user = await user_service.get_profile(identity, user_id)
    return ApiResponse.ok(user, "User details retrieved successfully")
