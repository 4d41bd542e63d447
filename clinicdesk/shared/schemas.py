from pydantic import BaseModel
from typing import Generic, List, TypeVar


T = TypeVar("T")


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str


class CountResponse(BaseModel):
    """Number of rows affected by a bulk operation."""

    count: int


class PaginatedResponse(BaseModel, Generic[T]):
    """A page of records plus the total count of matching records."""

    data: List[T]
    total: int
    page: int
    limit: int
