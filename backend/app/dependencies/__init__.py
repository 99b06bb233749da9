"""
Dependencies for dependency injection in routes.
"""
from app.dependencies.auth import (
    CurrentIdentity,
    get_current_identity,
    get_optional_identity,
)

__all__ = [
    "CurrentIdentity",
    "get_current_identity",
    "get_optional_identity",
]
