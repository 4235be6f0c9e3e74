"""
Custom Exceptions for Campus Portal
===================================

Every failure a handler can report maps onto one of these classes. The
exception handlers registered in ``campus_portal.main`` turn them into JSON
bodies of the form ``{"message": ..., "code": ...}``.

Usage:
    from campus_portal.core.exceptions import NotFoundError

    if not section:
        raise NotFoundError("Section", section_id)
"""

from typing import Optional, Any, Dict, List


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "SERVER_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            body["details"] = self.details
        return body


# ============================================
# Validation Errors (400)
# ============================================

class ValidationError(PortalError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        details = {"missing": list(missing)} if missing else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)

    @property
    def missing(self) -> List[str]:
        return self.details.get("missing", [])


class MissingFieldsError(ValidationError):
    """One or more required fields are absent or blank"""

    def __init__(self, missing: List[str], message: Optional[str] = None):
        super().__init__(
            message or f"Missing required fields: {', '.join(missing)}",
            missing=missing,
        )


# ============================================
# Authentication & Authorization Errors
# ============================================

class UnauthorizedError(PortalError):
    """Credential absent, malformed or expired"""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class TokenExpiredError(UnauthorizedError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")
        self.code = "TOKEN_EXPIRED"


class InvalidTokenError(UnauthorizedError):
    """JWT token is invalid"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class InvalidCredentialsError(UnauthorizedError):
    """Login with an unknown university ID or wrong password"""

    def __init__(self):
        super().__init__("Invalid credentials")
        self.code = "INVALID_CREDENTIALS"


class ForbiddenError(PortalError):
    """Valid credential, insufficient role"""

    status_code = 403

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Resource Errors (404)
# ============================================

class NotFoundError(PortalError):
    """Referenced entity is absent"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_').replace('-', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


# ============================================
# Server Errors (500)
# ============================================

class ServerError(PortalError):
    """Unexpected failure: store unavailable, disk I/O, ..."""

    status_code = 500

    def __init__(self, error: str, message: str = "Server error"):
        super().__init__(message, code="SERVER_ERROR")
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["error"] = self.error
        return body


class StorageError(ServerError):
    """Upload could not be written to disk"""

    def __init__(self, error: str):
        super().__init__(error, message="Failed to store uploaded file")
        self.code = "STORAGE_ERROR"
