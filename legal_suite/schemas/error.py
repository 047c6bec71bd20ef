"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ValidationErrorDetail(BaseModel):
    """Single field-level validation issue."""

    field: str
    message: str
    value: Any = None


class ErrorObject(BaseModel):
    """Canonical error payload object."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    message: str
    category: str
    timestamp: str
    request_id: str | None = Field(default=None, alias="requestId")
    details: dict[str, Any] | None = None


class ValidationErrorObject(ErrorObject):
    """Error payload carrying every invalid field of a request."""

    validation_errors: list[ValidationErrorDetail] = Field(alias="validationErrors")


class ErrorResponse(BaseModel):
    """Top-level API error response envelope."""

    success: Literal[False] = False
    error: ErrorObject

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and without unset optional members."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ValidationErrorResponse(ErrorResponse):
    """Error envelope for aggregated validation failures."""

    error: ValidationErrorObject

    def to_wire(self) -> dict[str, Any]:
        payload = self.model_dump(by_alias=True, exclude_none=True)
        # A missing field's value is reported as null rather than dropped.
        payload["error"]["validationErrors"] = [
            detail.model_dump() for detail in self.error.validation_errors
        ]
        return payload
