"""
Result Envelope
Uniform {success, data, error} shape returned by the store and every service
"""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

NOT_AVAILABLE = "Database not available"
NOT_FOUND = "Document not found"


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ApiResponse(BaseModel, Generic[T]):
    """Callers check `success` before touching `data`"""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
    pagination: Optional[PaginationInfo] = None


def ok(data: Any = None, message: Optional[str] = None,
       pagination: Optional[PaginationInfo] = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message, pagination=pagination)


def fail(error: str) -> ApiResponse:
    return ApiResponse(success=False, error=error)


def is_not_found(result: ApiResponse) -> bool:
    return not result.success and bool(result.error) and "not found" in result.error.lower()
