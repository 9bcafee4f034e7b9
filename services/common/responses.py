"""
Uniform response envelope shared by every endpoint.

Both successful and failed requests are answered with an ``ApiResponse``:

    {
        "statusCode": 200,
        "success": true,
        "message": "Contact retrieved successfully",
        "data": {...},
        "errors": null
    }
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Response envelope carrying a payload of type T or a list of errors."""

    status_code: int = Field(200, description="HTTP status code of the response")
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome message")
    data: Optional[T] = Field(None, description="Operation payload")
    errors: Optional[List[str]] = Field(
        None, description="Granular error messages suitable for display"
    )

    @classmethod
    def ok(
        cls, data: Optional[T], message: str, status_code: int = 200
    ) -> "ApiResponse[T]":
        return cls(status_code=status_code, success=True, message=message, data=data)

    @classmethod
    def fail(
        cls,
        message: str,
        errors: Optional[List[str]] = None,
        status_code: int = 400,
    ) -> "ApiResponse[T]":
        return cls(
            status_code=status_code,
            success=False,
            message=message,
            data=None,
            errors=errors or [],
        )
