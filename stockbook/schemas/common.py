from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    msg: str | None = None
    data: DataT | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    msg: str
    error: str | None = None


class HealthResponse(BaseModel):
    success: bool
    message: str
    timestamp: str


def strip_required(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be empty")
    return stripped
