"""
Response envelope shared by every account endpoint.
"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: status code, payload and a human readable message."""
    status_code: int = Field(default=200, description="HTTP status code")
    data: Optional[T] = Field(None, description="Response payload")
    message: str = Field(default="", description="Result message")
    success: bool = Field(default=True, description="True for 2xx/3xx results")

    @classmethod
    def ok(cls, data=None, message: str = "", status_code: int = 200) -> "ApiResponse":
        return cls(
            status_code=status_code,
            data=data,
            message=message,
            success=status_code < 400,
        )
