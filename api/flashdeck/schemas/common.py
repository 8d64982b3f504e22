"""
Response envelope shared by every API endpoint.
"""
from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ApiResponseError(BaseModel):
    """Error half of the envelope."""
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Either ``data`` or ``error`` is set, never both."""
    data: Optional[T] = None
    error: Optional[ApiResponseError] = None


class DatabaseQueryResult(BaseModel):
    """Outcome of an INSERT/UPDATE/DELETE."""
    rows_affected: int


def failure(message: str) -> dict:
    return {"data": None, "error": {"message": message}}
