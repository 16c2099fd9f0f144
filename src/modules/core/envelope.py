"""Uniform API response envelope.

Every response rendered by the API has the shape::

    {"success": bool, "data": T | null, "message": str, "errors": [str]}
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Immutable envelope wrapping a payload or an error description."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Optional[T] = None
    message: str = ""
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def success_result(cls, data: Any, message: str = "") -> ApiResponse:
        return cls(success=True, data=data, message=message)

    @classmethod
    def error_result(
        cls, message: str, errors: Optional[List[str]] = None
    ) -> ApiResponse:
        return cls(success=False, message=message, errors=list(errors or []))

    def to_payload(self) -> dict[str, Any]:
        """Render to JSON-compatible primitives (aliases applied to nested DTOs)."""
        return self.model_dump(mode="json", by_alias=True)
