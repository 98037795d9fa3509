"""
Service-level error taxonomy.

Each error carries a stable machine-readable code, a human message and the
HTTP status it maps to. The API layer renders them; services only raise.
"""

from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    code = "internal_error"
    message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        return {"error": self.message, "code": self.code}


class ValidationError(ServiceError):
    """Malformed input. Lists every violated field, not only the first."""

    status_code = 400
    code = "validation_error"
    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__()
        self.errors = errors

    def to_dict(self) -> Dict:
        return {"errors": self.errors, "code": self.code}


class InvalidCredentials(ServiceError):
    # Same text for unknown email and wrong password.
    status_code = 401
    code = "invalid_credentials"
    message = "Invalid credentials"


class InvalidInviteCode(ServiceError):
    status_code = 400
    code = "invalid_invite_code"
    message = "Invalid registration code"


class UserAlreadyExists(ServiceError):
    status_code = 400
    code = "user_already_exists"
    message = "User already exists"


class Unauthenticated(ServiceError):
    """Missing, malformed, tampered or expired bearer token."""

    status_code = 401
    code = "unauthenticated"
    message = "Authentication required"


class Forbidden(ServiceError):
    status_code = 403
    code = "forbidden"
    message = "Not authorized"


class Conflict(ServiceError):
    status_code = 400
    code = "conflict"
    message = "Jersey number already taken"


class NotFound(ServiceError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class ServiceUnavailable(ServiceError):
    status_code = 503
    code = "service_unavailable"
    message = "Service temporarily unavailable"
