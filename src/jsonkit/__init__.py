"""jsonkit

JSON Patch (RFC 6902) engine with string-append semantics for `add`, a
fluent operation builder, a JSON parser with per-field coercion, and simple
memory/file stores.
"""

from .builder import JsonPatchBuilder
from .models.operation import OperationType
from .models.result import PatchResult
from .parser import JsonFieldConversion, JsonParser, ParseField
from .patcher import JsonPatcher
from .utils.errors import (
    AssertionFailedError,
    InvalidOperationError,
    JsonKitError,
    MalformedPointerError,
    PathNotFoundError,
)
from .utils.json_patch import join_path

__version__ = "0.1.0"

__all__ = [
    "AssertionFailedError",
    "InvalidOperationError",
    "JsonFieldConversion",
    "JsonKitError",
    "JsonParser",
    "JsonPatchBuilder",
    "JsonPatcher",
    "MalformedPointerError",
    "OperationType",
    "ParseField",
    "PatchResult",
    "PathNotFoundError",
    "join_path",
]
