"""JSON Patch Engine

Applies an ordered list of RFC 6902 operations to a working copy of a
document. One non-standard rule: an `add` whose value is a string, aimed at
a location that already holds a string, appends to that string instead of
overwriting it.
"""

import logging
from typing import Any, Sequence

from .models.operation import (
    AddOperation,
    CopyOperation,
    GetOperation,
    MoveOperation,
    RemoveOperation,
    ReplaceOperation,
    TestOperation,
)
from .models.result import PatchResult
from .utils.errors import (
    AssertionFailedError,
    InvalidOperationError,
    MalformedPointerError,
    PathNotFoundError,
    wrap_unexpected_error,
)
from .utils.json_patch import to_operations
from .utils.json_values import deep_clone, deep_equal
from .utils.pointer import array_index, locate, parse_pointer, resolve

logger = logging.getLogger(__name__)


def _add(document: Any, path: str, value: Any) -> Any:
    if not parse_pointer(path):
        return value

    container, key = locate(document, path)
    if isinstance(container, list):
        container.insert(array_index(container, key, path, allow_end=True), value)
    else:
        container[key] = value
    return document


def _remove(document: Any, path: str) -> Any:
    if not parse_pointer(path):
        raise MalformedPointerError("Cannot remove the document root", details={"pointer": path})

    container, key = locate(document, path)
    if isinstance(container, list):
        del container[array_index(container, key, path)]
    elif key in container:
        del container[key]
    else:
        raise PathNotFoundError(f"Path '{path}' does not exist", details={"pointer": path})
    return document


def _replace(document: Any, path: str, value: Any) -> Any:
    if not parse_pointer(path):
        return value

    container, key = locate(document, path)
    if isinstance(container, list):
        container[array_index(container, key, path)] = value
    elif key in container:
        container[key] = value
    else:
        raise PathNotFoundError(f"Path '{path}' does not exist", details={"pointer": path})
    return document


def _is_proper_prefix(source: str, target: str) -> bool:
    source_tokens = parse_pointer(source)
    target_tokens = parse_pointer(target)
    return (
        len(source_tokens) < len(target_tokens)
        and target_tokens[:len(source_tokens)] == source_tokens
    )


class JsonPatcher:
    """Apply JSON Patch operations to documents without mutating them.

    Stateless: a single instance may be shared between threads, since each
    call works on its own deep copy of the input.
    """

    def apply(self, document: Any, operations: Sequence[Any]) -> Any:
        """Apply operations in order and return the patched document.

        Args:
            document: JSON-compatible value; never mutated
            operations: Operation models or RFC 6902 dicts

        Returns:
            New, fully independent document

        Raises:
            PathNotFoundError: If a required location doesn't exist
            AssertionFailedError: If a `test` operation doesn't match
            MalformedPointerError: If a pointer can't be parsed or traversed
            InvalidOperationError: If an operation is structurally invalid
        """
        operations = to_operations(operations)
        logger.debug(f"Applying {len(operations)} patch operation(s)")

        target = deep_clone(document)
        for index, operation in enumerate(operations):
            logger.debug(f"Operation {index}: {operation.op} {operation.path}")
            target = self._apply_operation(target, operation)

        return target

    def apply_safe(self, document: Any, operations: Sequence[Any]) -> PatchResult:
        """Apply operations, capturing any failure instead of raising.

        Returns:
            PatchResult with `data` on success or `error` on failure; the
            input document is left untouched either way.
        """
        try:
            return PatchResult.ok(self.apply(document, operations))
        except Exception as e:
            error = wrap_unexpected_error(e)
            logger.warning(f"Patch failed: {error}")
            return PatchResult.fail(error)

    # Aliases
    patch = apply
    safe_patch = apply_safe

    def _apply_operation(self, target: Any, operation: Any) -> Any:
        if isinstance(operation, AddOperation):
            if isinstance(operation.value, str):
                try:
                    current = resolve(target, operation.path)
                except (PathNotFoundError, MalformedPointerError):
                    current = None
                if isinstance(current, str):
                    return _replace(target, operation.path, current + operation.value)
            return _add(target, operation.path, deep_clone(operation.value))

        if isinstance(operation, RemoveOperation):
            return _remove(target, operation.path)

        if isinstance(operation, ReplaceOperation):
            return _replace(target, operation.path, deep_clone(operation.value))

        if isinstance(operation, MoveOperation):
            value = resolve(target, operation.from_)
            if operation.from_ == operation.path:
                return target
            if _is_proper_prefix(operation.from_, operation.path):
                raise InvalidOperationError(
                    f"Cannot move '{operation.from_}' into its own child '{operation.path}'",
                    details={"from": operation.from_, "path": operation.path}
                )
            target = _remove(target, operation.from_)
            return _add(target, operation.path, value)

        if isinstance(operation, CopyOperation):
            value = resolve(target, operation.from_)
            return _add(target, operation.path, deep_clone(value))

        if isinstance(operation, TestOperation):
            actual = resolve(target, operation.path)
            if not deep_equal(actual, operation.value):
                raise AssertionFailedError(
                    f"Test failed: value at '{operation.path}' does not match",
                    details={"path": operation.path, "expected": operation.value, "actual": actual}
                )
            return target

        if isinstance(operation, GetOperation):
            resolve(target, operation.path)
            return target

        raise InvalidOperationError(
            f"Unsupported operation {type(operation).__name__}",
            details={"operation": repr(operation)}
        )
