"""
Role-based authorization policy.

Pure decision functions: they take the resolved session identity and the
requested resource and return an ``AccessDecision``. Nothing here touches
the database or the request, so every rule can be tested on its own.

    Admin  -> may read any account and the whole directory
    Staff  -> may only read their own account
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from app.core.errors import ForbiddenError
from app.schemas.auth import SessionIdentity


class Scope(str, Enum):
    """What a granted request is allowed to read."""
    SELF = "self"
    TARGET = "target"
    DIRECTORY = "directory"


class AccessDecision(BaseModel):
    """Outcome of a policy check."""
    allowed: bool
    scope: Optional[Scope] = None
    target_id: Optional[str] = None
    reason: Optional[str] = None

    def enforce(self) -> "AccessDecision":
        """Raise ForbiddenError if the decision is a denial."""
        if not self.allowed:
            raise ForbiddenError(self.reason)
        return self


def decide_profile_access(
    identity: SessionIdentity,
    requested_id: Optional[str] = None,
) -> AccessDecision:
    """
    Decide which account a profile request reads.

    An Admin naming a target reads that target. Everyone else, including an
    Admin without a target, reads their own account. A Staff caller's target
    is ignored rather than refused.
    """
    if identity.is_admin and requested_id:
        return AccessDecision(allowed=True, scope=Scope.TARGET, target_id=requested_id)
    return AccessDecision(allowed=True, scope=Scope.SELF, target_id=identity.id)


def decide_directory_access(identity: SessionIdentity) -> AccessDecision:
    """Only Admins may list the account directory."""
    if identity.is_admin:
        return AccessDecision(allowed=True, scope=Scope.DIRECTORY)
    return AccessDecision(allowed=False, reason="Access denied. Admins only")


def decide_login_payload(identity: SessionIdentity) -> AccessDecision:
    """Admins see the directory after login, Staff see themselves."""
    if identity.is_admin:
        return AccessDecision(allowed=True, scope=Scope.DIRECTORY)
    return AccessDecision(allowed=True, scope=Scope.SELF, target_id=identity.id)
