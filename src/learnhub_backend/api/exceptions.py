from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class LearnHubException(HTTPException):
    """HTTPException tagged with the error `kind` rendered next to `detail`."""
    kind = "Error"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Error"

    def __init__(self, detail: Any = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.default_detail,
            headers=headers,
        )


class NotFoundException(LearnHubException):
    kind = "NotFound"
    status_code_default = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ForbiddenException(LearnHubException):
    kind = "Forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"

    def __init__(self, detail: Any = None, headers: Optional[Dict[str, str]] = None, reason: Optional[str] = None):
        super().__init__(detail=detail, headers=headers)
        self.reason = reason


class BadRequestException(LearnHubException):
    kind = "BadRequest"
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class ConflictException(BadRequestException):
    """Duplicate state, e.g. an existing enrollment. Kept on 400 for client compatibility."""
    kind = "Conflict"
    default_detail = "Conflict"


class ValidationException(BadRequestException):
    kind = "ValidationError"
    default_detail = "Validation failed"


class UnauthorizedException(LearnHubException):
    kind = "Unauthorized"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"

    def __init__(self, detail: Any = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(detail=detail, headers=headers or {"WWW-Authenticate": "Bearer"})


class InternalServerException(LearnHubException):
    kind = "InternalError"
    default_detail = "Internal server error"


def error_kind(exception: HTTPException) -> str:
    return getattr(exception, "kind", None) or "Error"
