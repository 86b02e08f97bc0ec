"""jsonkit Error Handling Utilities

Custom exception classes for patching, parsing and store operations with
standardized error messages.
"""

from typing import Optional, Dict, Any


class JsonKitError(Exception):
    """Base exception for all jsonkit errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize jsonkit error.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PathNotFoundError(JsonKitError):
    """Raised when a JSON Pointer does not address an existing location.

    Examples:
    - remove/replace of a missing key
    - move/copy from a missing source
    - array index past the end of the array
    """

    pass


class AssertionFailedError(JsonKitError):
    """Raised when a `test` operation's value does not match the document."""

    pass


class MalformedPointerError(JsonKitError):
    """Raised when a pointer string cannot be parsed or traversed.

    Examples:
    - pointer not starting with '/'
    - invalid '~' escape sequence
    - non-integer token used against an array
    """

    pass


class InvalidOperationError(JsonKitError):
    """Raised when a patch operation is structurally invalid.

    Examples:
    - unknown 'op'
    - missing 'value' or 'from'
    - moving a value into one of its own children
    """

    pass


class ParseError(JsonKitError):
    """Raised when JSON text cannot be decoded or its fields coerced."""

    pass


class ValidationError(JsonKitError):
    """Raised when store input fails validation (e.g. a path-like id)."""

    pass


class StoreError(JsonKitError):
    """Raised when a store operation cannot be performed."""

    pass


class EntryNotFoundError(StoreError):
    """Raised when a requested store entry doesn't exist."""

    pass


def wrap_unexpected_error(error: BaseException) -> JsonKitError:
    """Convert an arbitrary exception to a JsonKitError.

    JsonKitError instances are returned unchanged; anything else is wrapped
    with the original chained as ``__cause__``.

    Args:
        error: Exception raised while applying a patch

    Returns:
        JsonKitError instance
    """
    if isinstance(error, JsonKitError):
        return error

    wrapped = JsonKitError(
        f"Unexpected error: {error}",
        details={"type": type(error).__name__}
    )
    wrapped.__cause__ = error
    return wrapped
