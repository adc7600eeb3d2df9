"""Error taxonomy shared by the session manager and the engagement ledger.

Every error is an ``HTTPException`` so FastAPI routes can raise it directly, and
carries a stable ``kind`` that the exception handler in ``main`` puts in the
response envelope.
"""
from typing import Dict, Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """Base class for errors surfaced to API callers"""

    kind: str = "error"
    status_code_default: int = status.HTTP_400_BAD_REQUEST
    message_default: str = "Request failed"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=message or self.message_default,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail


class InvalidArgument(ApiError):
    kind = "invalid_argument"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Invalid argument"


class SelfReference(InvalidArgument):
    """Raised when an entity is asked to reference itself (e.g. self-subscription)"""

    kind = "self_reference"
    message_default = "Self reference is not allowed"


class Unauthorized(ApiError):
    kind = "unauthorized"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Unauthorized"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    kind = "forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Forbidden"


class NotFound(ApiError):
    kind = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Resource not found"


class Conflict(ApiError):
    kind = "conflict"
    status_code_default = status.HTTP_409_CONFLICT
    message_default = "Conflict"


class Upstream(ApiError):
    kind = "upstream"
    status_code_default = status.HTTP_503_SERVICE_UNAVAILABLE
    message_default = "Upstream dependency failed"
