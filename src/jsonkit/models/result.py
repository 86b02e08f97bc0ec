"""Patch Result Model

Discriminated outcome of a safe patch call: either the transformed document
or the failure that aborted it.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..utils.errors import JsonKitError


class PatchResult(BaseModel):
    """Outcome of JsonPatcher.apply_safe.

    Branch on `success`: `data` is only meaningful when True, `error` only
    when False.
    """

    success: bool = Field(description="Whether every operation applied")
    data: Any = Field(default=None, description="Patched document")
    error: Optional[JsonKitError] = Field(default=None, description="Failure reason")

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    @classmethod
    def ok(cls, data: Any) -> "PatchResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: JsonKitError) -> "PatchResult":
        return cls(success=False, error=error)

    def unwrap(self) -> Any:
        """Return data, or raise the captured error."""
        if not self.success:
            raise self.error
        return self.data
