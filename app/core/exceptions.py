# /app/core/exceptions.py

"""
Domain error taxonomy for the assignment tracker.

Services raise these instead of HTTPException so that business rules stay
independent of the web layer. The handlers registered in `app.main` translate
each one into a JSON response with its `status_code`.

Usage:
    from app.core.exceptions import NotFoundError

    if student is None:
        raise NotFoundError("Student", student_id)
"""

from typing import Any, Dict, Optional


class TrackerError(Exception):
    """Base exception for every foreseeable domain failure."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "code": self.code,
            "details": self.details
        }


# ============================================
# Input Errors (400)
# ============================================

class ValidationError(TrackerError):
    """Malformed or missing input that passed schema validation."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateKeyError(TrackerError):
    """A natural key (regNo, email, report week) is already taken."""

    status_code = 400

    def __init__(self, field: str, value: Any, message: Optional[str] = None):
        super().__init__(
            message or f"{field} '{value}' already exists",
            code="DUPLICATE_KEY",
            details={"field": field, "value": value}
        )


class InvalidReferenceError(TrackerError):
    """A foreign id is dangling or points at the wrong kind of record."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INVALID_REFERENCE", details=details)


class InvalidGroupingError(TrackerError):
    """The requested pair is not two available students of the caller."""

    status_code = 400

    def __init__(self, message: str = "Invalid students or students already in a group", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INVALID_GROUPING", details=details)


# ============================================
# Lookup Errors (404)
# ============================================

class NotFoundError(TrackerError):
    """No record matches the id inside the caller's scope."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        message = f"{resource} not found" if resource_id is None else f"{resource} with ID {resource_id} not found"
        super().__init__(message, code="NOT_FOUND", details={"resource": resource, "id": resource_id})


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthError(TrackerError):
    """Missing, malformed, expired or otherwise invalid credentials."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class ForbiddenRoleError(TrackerError):
    """Authenticated, but the route belongs to another role."""

    status_code = 403

    def __init__(self, required_role: str):
        super().__init__(
            f"Access denied. {required_role.capitalize()} role required.",
            code="FORBIDDEN_ROLE",
            details={"required_role": required_role}
        )


# ============================================
# Infrastructure Errors
# ============================================

class StoreFailure(TrackerError):
    """Unexpected storage-layer failure. The message shown to callers is generic."""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message, code="STORE_FAILURE")


class ExternalServiceError(TrackerError):
    """The spreadsheet collaborator is unconfigured or failed."""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR")
