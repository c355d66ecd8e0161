# backend/utils/exceptions.py
"""Domain errors raised by routes and dependencies.

Each error carries the HTTP status and the human-readable message returned
to the client; ``main.py`` registers the handler that renders them.
"""
from typing import Any, Dict, Optional


class PortalError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, extra: Optional[Dict[str, Any]] = None):
        self.message = message or self.message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class Unauthorized(PortalError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(PortalError):
    status_code = 403
    message = "Admin access required"


class InvalidCredentials(PortalError):
    status_code = 401
    message = "Invalid email or password"


class AccountDeactivated(PortalError):
    status_code = 401
    message = "Account is deactivated"


class AlreadyMarked(PortalError):
    status_code = 400
    message = "Attendance already marked for today"


class ValidationError(PortalError):
    status_code = 400
    message = "Validation failed"


class NotFound(PortalError):
    status_code = 404
    message = "Not found"


class ReviewAlreadyDecided(PortalError):
    status_code = 409
    message = "Review has already been reviewed"


class InternalError(PortalError):
    pass
