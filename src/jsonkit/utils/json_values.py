"""JSON Value Utilities

Structural copy and comparison over the closed set of JSON value shapes
(object, array, scalar). Used by the patch engine for its working copy and
by the `test` operation.
"""

from typing import Any, Optional, Set

from .errors import InvalidOperationError


def deep_clone(value: Any, _active: Optional[Set[int]] = None) -> Any:
    """Return a structurally independent copy of a JSON value.

    Dicts and lists (tuples become lists) are copied recursively; scalars are
    returned as-is since they are immutable.

    Args:
        value: JSON-compatible value

    Returns:
        Deep copy of value

    Raises:
        InvalidOperationError: If value contains a reference cycle
    """
    if not isinstance(value, (dict, list, tuple)):
        return value

    active = _active if _active is not None else set()
    marker = id(value)
    if marker in active:
        raise InvalidOperationError(
            "Cannot copy a cyclic value; JSON documents must be acyclic",
            details={"type": type(value).__name__}
        )

    active.add(marker)
    try:
        if isinstance(value, dict):
            return {key: deep_clone(item, active) for key, item in value.items()}
        return [deep_clone(item, active) for item in value]
    finally:
        active.discard(marker)


def deep_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values the way RFC 6902 `test` does.

    Booleans never equal numbers, ints and floats compare numerically,
    objects compare by key set and member values, arrays element-wise.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right

    if isinstance(left, dict):
        if not isinstance(right, dict) or left.keys() != right.keys():
            return False
        return all(deep_equal(left[key], right[key]) for key in left)

    if isinstance(left, (list, tuple)):
        if not isinstance(right, (list, tuple)) or len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))

    if type(left) is not type(right):
        return False
    return left == right
