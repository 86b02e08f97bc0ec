"""jsonkit Data Models

This package contains Pydantic models for patch operations and results.
"""

from .operation import (
    OperationType,
    Operation,
    AddOperation,
    RemoveOperation,
    ReplaceOperation,
    MoveOperation,
    CopyOperation,
    TestOperation,
    GetOperation,
)
from .result import PatchResult

__all__ = [
    "OperationType",
    "Operation",
    "AddOperation",
    "RemoveOperation",
    "ReplaceOperation",
    "MoveOperation",
    "CopyOperation",
    "TestOperation",
    "GetOperation",
    "PatchResult",
]
