"""Error taxonomy.

Every error is an ``HTTPException`` so services can raise it directly, the
same way request handlers raise ``HTTPException``. ``main`` renders all of
them with the ``{"status": "error", "message": ...}`` envelope.
"""

from typing import Optional

from fastapi import HTTPException


class ClinicError(HTTPException):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(ClinicError):
    """Missing or malformed field, unresolved reference, illegal state change"""

    status_code = 400
    default_message = "Invalid request"


class AuthError(ClinicError):
    status_code = 401
    default_message = "Not authenticated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(ClinicError):
    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFoundError(ClinicError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ClinicError):
    status_code = 409
    default_message = "Resource already exists"


class ServerError(ClinicError):
    status_code = 500
    default_message = "Internal server error"
