from dataclasses import dataclass
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from campus_portal.core.exceptions import ForbiddenError, InvalidTokenError, UnauthorizedError
from campus_portal.core.logging_config import set_user_id
from campus_portal.core.security import decode_token
from campus_portal.models.user import UserRole
from campus_portal.modules.auth.permissions import Capability, has_capability

# auto_error=False: a missing header must be a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Caller identity as asserted by the token claims"""
    user_id: str
    university_id: str
    role: UserRole
    full_name: str

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def can(self, capability: Capability) -> bool:
        return has_capability(self.role, capability)


def principal_from_token(token: str) -> Principal:
    """
    Verify ``token`` and build the Principal from its claims.

    No store lookup happens here: a token stays valid for its whole lifetime,
    even after the user it names has been deleted.
    """
    payload = decode_token(token)

    user_id = payload.get("sub")
    university_id = payload.get("university_id")
    if not user_id or not university_id:
        raise InvalidTokenError("Invalid token payload")

    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise InvalidTokenError("Invalid token role")

    return Principal(
        user_id=user_id,
        university_id=university_id,
        role=role,
        full_name=payload.get("full_name") or "",
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Get the authenticated caller (any role)"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    principal = principal_from_token(credentials.credentials)
    set_user_id(principal.user_id)
    return principal


def require_capability(capability: Capability):
    """Build a dependency that admits only principals granted ``capability``"""

    async def checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.can(capability):
            if capability is Capability.MANAGE_CONTENT:
                raise ForbiddenError("Admin access required")
            raise ForbiddenError(f"Missing capability: {capability.value}")
        return principal

    return checker


get_current_admin = require_capability(Capability.MANAGE_CONTENT)
get_current_reader = require_capability(Capability.BROWSE_CONTENT)
