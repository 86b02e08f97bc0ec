"""JSON Patch Operation Models

Pydantic models for RFC 6902 patch operations, plus the non-standard
read-only `_get` marker.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, field_validator


class OperationType(str, Enum):
    """Patch operation kinds, valued by their wire tag."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"
    GET = "_get"


def _check_pointer(value: str) -> str:
    if value != "" and not value.startswith("/"):
        raise ValueError(f"'{value}' must start with '/' (JSON Pointer format)")
    return value


class BaseOperation(BaseModel):
    """Fields shared by every operation."""

    path: str = Field(description="JSON Pointer to the operation's target")

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        return _check_pointer(value)

    def to_wire(self) -> Dict[str, Any]:
        """Dump the operation in RFC 6902 wire format."""
        return self.model_dump(by_alias=True)


class AddOperation(BaseOperation):
    """Insert a value (or append to an existing string)."""

    op: Literal["add"] = "add"
    value: Any = Field(description="Value to insert")


class RemoveOperation(BaseOperation):
    """Delete the value at path."""

    op: Literal["remove"] = "remove"


class ReplaceOperation(BaseOperation):
    """Overwrite the existing value at path."""

    op: Literal["replace"] = "replace"
    value: Any = Field(description="Replacement value")


class MoveOperation(BaseOperation):
    """Remove the value at `from` and add it at path."""

    op: Literal["move"] = "move"
    from_: str = Field(alias="from", description="JSON Pointer to the source")

    @field_validator("from_")
    @classmethod
    def _validate_from(cls, value: str) -> str:
        return _check_pointer(value)


class CopyOperation(BaseOperation):
    """Add a copy of the value at `from` at path."""

    op: Literal["copy"] = "copy"
    from_: str = Field(alias="from", description="JSON Pointer to the source")

    @field_validator("from_")
    @classmethod
    def _validate_from(cls, value: str) -> str:
        return _check_pointer(value)


class TestOperation(BaseOperation):
    """Assert the value at path equals value."""

    __test__ = False  # not a pytest test class

    op: Literal["test"] = "test"
    value: Any = Field(description="Expected value")


class GetOperation(BaseOperation):
    """Read-only marker; resolves path without changing the document."""

    op: Literal["_get"] = "_get"
    value: Any = Field(default=None, description="Unused")


Operation = Annotated[
    Union[
        AddOperation,
        RemoveOperation,
        ReplaceOperation,
        MoveOperation,
        CopyOperation,
        TestOperation,
        GetOperation,
    ],
    Field(discriminator="op"),
]
