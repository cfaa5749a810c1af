# app/schemas/common.py
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope every endpoint answers with."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
