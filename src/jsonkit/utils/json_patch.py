"""JSON Patch Utilities

Utilities for turning path segments into JSON Pointers and raw RFC 6902
dictionaries into operation models. Used by JsonPatchBuilder and by
JsonPatcher when it is handed wire-format patches.
"""

import re
from typing import Any, Dict, List, Sequence, Union

import pydantic
from pydantic import TypeAdapter

from ..models.operation import Operation, OperationType
from .errors import InvalidOperationError
from .pointer import escape_token

JsonKey = Union[str, int]
JsonPath = Union[JsonKey, Sequence[JsonKey]]

_LEADING_SLASHES = re.compile(r"^/+")

_operations_adapter = TypeAdapter(List[Operation])


def join_path(path: JsonPath) -> str:
    """Convert a path to a JSON Pointer string.

    Args:
        path: A complete path (str or int), or a sequence of segments.
            Example: ["users", 0, "name"]

    Returns:
        Pointer with a single leading slash.
        Example: "/users/0/name"
    """
    if isinstance(path, (str, int)):
        joined = f"{path}"
    else:
        joined = "/".join(escape_token(str(segment)) for segment in path)

    return _LEADING_SLASHES.sub("/", f"/{joined}")


def validate_json_patch(patches: List[Dict[str, Any]]) -> bool:
    """Validate JSON Patch operations structure.

    Args:
        patches: List of JSON Patch operations to validate

    Returns:
        True if valid

    Raises:
        InvalidOperationError: If any operation is invalid
    """
    if not isinstance(patches, list):
        raise InvalidOperationError("Patches must be a list")

    known_ops = {op_type.value for op_type in OperationType}

    for i, patch in enumerate(patches):
        if not isinstance(patch, dict):
            raise InvalidOperationError(f"Patch {i} must be a dictionary")

        if "op" not in patch:
            raise InvalidOperationError(f"Patch {i} missing required 'op' field")

        op = patch["op"]
        if op not in known_ops:
            raise InvalidOperationError(
                f"Patch {i} has invalid op '{op}', must be one of {sorted(known_ops)}",
                details={"index": i, "op": op}
            )

        if "path" not in patch:
            raise InvalidOperationError(f"Patch {i} missing required 'path' field")

        path = patch["path"]
        if not isinstance(path, str) or (path and not path.startswith("/")):
            raise InvalidOperationError(
                f"Patch {i} path must start with '/' (JSON Pointer format)",
                details={"index": i, "path": path}
            )

        if op in (OperationType.ADD, OperationType.REPLACE, OperationType.TEST) and "value" not in patch:
            raise InvalidOperationError(f"Patch {i} with op='{op}' missing required 'value' field")

        if op in (OperationType.MOVE, OperationType.COPY) and "from" not in patch:
            raise InvalidOperationError(f"Patch {i} with op='{op}' missing required 'from' field")

    return True


def to_operations(patches: Sequence[Any]) -> List[Any]:
    """Coerce a mix of operation models and wire dicts to operation models.

    Raises:
        InvalidOperationError: If any entry is not a valid operation
    """
    patches = list(patches)
    raw = [patch for patch in patches if isinstance(patch, dict)]
    if raw:
        validate_json_patch(raw)

    try:
        return _operations_adapter.validate_python(patches)
    except pydantic.ValidationError as e:
        raise InvalidOperationError(
            f"Invalid patch operations: {e.error_count()} error(s)",
            details={"errors": [err["msg"] for err in e.errors()]}
        ) from e
