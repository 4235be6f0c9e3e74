"""
Role → capability table.

Roles are a closed enumeration; every role must have an entry here. Route
guards ask for a capability, never for a role string.
"""

import enum
from typing import Dict, FrozenSet

from campus_portal.models.user import UserRole


class Capability(str, enum.Enum):
    """What a caller may do"""
    MANAGE_CONTENT = "manage_content"   # admin surface: sections, students, files, news, KB
    BROWSE_CONTENT = "browse_content"   # student surface and realtime updates


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset({Capability.MANAGE_CONTENT, Capability.BROWSE_CONTENT}),
    UserRole.STUDENT: frozenset({Capability.BROWSE_CONTENT}),
}

_unmapped = set(UserRole) - set(ROLE_CAPABILITIES)
if _unmapped:
    raise RuntimeError(
        f"Roles without a capability entry: {sorted(r.value for r in _unmapped)}"
    )


def has_capability(role: UserRole, capability: Capability) -> bool:
    """True if ``role`` is granted ``capability``"""
    return capability in ROLE_CAPABILITIES[role]
