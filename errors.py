from typing import Optional

from fastapi import HTTPException, status

from models.ErrorCode import ErrorCode


class ServiceError(HTTPException):
    """
    Base class of all errors raised by the reservation services.

    Subclasses HTTPException so FastAPI renders it directly; the detail
    carries the enumerated code next to the message.
    """
    code: ErrorCode = ErrorCode.INTERNAL
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Optional[dict] = None):
        self.message = message
        super().__init__(
            status_code=self.status_code_default,
            detail={"success": False, "code": self.code.value, "error": message},
            headers=headers,
        )

    def __str__(self):
        return f"{self.code.value}: {self.message}"


class InvalidArgumentError(ServiceError):
    code = ErrorCode.INVALID_ARGUMENT
    status_code_default = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(ServiceError):
    code = ErrorCode.UNAUTHENTICATED
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(ServiceError):
    code = ErrorCode.FORBIDDEN
    status_code_default = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    code = ErrorCode.NOT_FOUND
    status_code_default = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    code = ErrorCode.CONFLICT
    status_code_default = status.HTTP_409_CONFLICT


class InternalError(ServiceError):
    code = ErrorCode.INTERNAL
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
