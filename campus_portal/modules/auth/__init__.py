from campus_portal.modules.auth.dependencies import (
    Principal,
    get_current_principal,
    get_current_admin,
    get_current_reader,
    principal_from_token,
    require_capability,
)
from campus_portal.modules.auth.permissions import Capability, ROLE_CAPABILITIES, has_capability

__all__ = [
    "Principal",
    "get_current_principal",
    "get_current_admin",
    "get_current_reader",
    "principal_from_token",
    "require_capability",
    "Capability",
    "ROLE_CAPABILITIES",
    "has_capability",
]
