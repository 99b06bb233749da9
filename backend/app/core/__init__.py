"""
Core module - Security, authorization policy and error taxonomy.
"""
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from app.core.errors import (
    AccountError,
    ErrorKind,
    register_exception_handlers,
)
from app.core.policy import (
    AccessDecision,
    Scope,
    decide_directory_access,
    decide_login_payload,
    decide_profile_access,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "AccountError",
    "ErrorKind",
    "register_exception_handlers",
    "AccessDecision",
    "Scope",
    "decide_directory_access",
    "decide_login_payload",
    "decide_profile_access",
]
