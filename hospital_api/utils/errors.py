from typing import Any, Optional
from fastapi import HTTPException, status


class BusinessError(HTTPException):
    """Business rule violation rendered as a user-facing error response"""
    error_type = "BusinessError"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, details: Optional[Any] = None):
        super().__init__(status_code=self.status_code, detail=detail)
        self.details = details


class NotFoundError(BusinessError):
    error_type = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BusinessError):
    error_type = "Conflict"
    status_code = status.HTTP_409_CONFLICT


class StorageConflictError(ConflictError):
    """A database constraint rejected the write after the pre-checks passed"""
    error_type = "StorageConflict"


class ValidationFailedError(BusinessError):
    error_type = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
