"""JSON Pointer Resolution (RFC 6901)

Translates slash-delimited pointer strings into locations within a JSON
document. Both "" and "/" address the document root; a trailing empty token
(e.g. "/a/") addresses a key literally named "".
"""

import logging
from typing import Any, List, NamedTuple, Union

from .errors import MalformedPointerError, PathNotFoundError

logger = logging.getLogger(__name__)

# Token meaning "one past the last element" of an array
END_OF_ARRAY = "-"


class Location(NamedTuple):
    """Parent container and final token addressed by a pointer."""

    container: Any
    key: str


def unescape_token(token: str) -> str:
    """Decode a single reference token ("~1" -> "/", "~0" -> "~")."""
    if "~" not in token:
        return token

    decoded = []
    i = 0
    while i < len(token):
        char = token[i]
        if char == "~":
            following = token[i + 1:i + 2]
            if following == "0":
                decoded.append("~")
            elif following == "1":
                decoded.append("/")
            else:
                raise MalformedPointerError(
                    f"Invalid escape sequence in pointer token '{token}'",
                    details={"token": token}
                )
            i += 2
            continue
        decoded.append(char)
        i += 1
    return "".join(decoded)


def escape_token(token: str) -> str:
    """Encode a key for use as a pointer reference token."""
    return token.replace("~", "~0").replace("/", "~1")


def parse_pointer(pointer: str) -> List[str]:
    """Split a pointer into decoded reference tokens.

    Args:
        pointer: JSON Pointer string, e.g. "/users/0/name"

    Returns:
        List of tokens; empty for the root pointer

    Raises:
        MalformedPointerError: If pointer isn't a string starting with '/'
    """
    if not isinstance(pointer, str):
        raise MalformedPointerError(
            f"Pointer must be a string, got {type(pointer).__name__}",
            details={"pointer": pointer}
        )

    if pointer in ("", "/"):
        return []

    if not pointer.startswith("/"):
        raise MalformedPointerError(
            f"Pointer '{pointer}' must start with '/'",
            details={"pointer": pointer}
        )

    return [unescape_token(token) for token in pointer[1:].split("/")]


def array_index(array: list, token: str, pointer: str, allow_end: bool = False) -> int:
    """Convert a reference token to an index into array.

    Args:
        array: List being indexed
        token: Reference token
        pointer: Full pointer (for error messages)
        allow_end: Whether len(array) (and "-") is acceptable, as for `add`

    Returns:
        Integer index

    Raises:
        MalformedPointerError: If token isn't a valid array index
        PathNotFoundError: If index is out of range
    """
    if allow_end and token == END_OF_ARRAY:
        return len(array)

    if not (token.isascii() and token.isdigit()) or (len(token) > 1 and token.startswith("0")):
        raise MalformedPointerError(
            f"Invalid array index '{token}' in pointer '{pointer}'",
            details={"pointer": pointer, "token": token}
        )

    index = int(token)
    limit = len(array) if allow_end else len(array) - 1
    if index > limit:
        raise PathNotFoundError(
            f"Array index {index} out of range in pointer '{pointer}'",
            details={"pointer": pointer, "index": index, "length": len(array)}
        )
    return index


def _child(node: Any, token: str, pointer: str) -> Any:
    if isinstance(node, dict):
        if token not in node:
            raise PathNotFoundError(
                f"Path '{pointer}' does not exist",
                details={"pointer": pointer, "missing": token}
            )
        return node[token]

    if isinstance(node, list):
        return node[array_index(node, token, pointer)]

    raise PathNotFoundError(
        f"Path '{pointer}' does not exist: cannot descend into {type(node).__name__}",
        details={"pointer": pointer, "missing": token}
    )


def _walk(document: Any, tokens: List[str], pointer: str) -> Any:
    node = document
    for token in tokens:
        node = _child(node, token, pointer)
    return node


def resolve(document: Any, pointer: Union[str, List[str]]) -> Any:
    """Return the value addressed by pointer.

    Args:
        document: JSON document
        pointer: Pointer string (or already parsed tokens)

    Returns:
        Addressed value; the whole document for the root pointer

    Raises:
        PathNotFoundError: If any segment is missing or not traversable
        MalformedPointerError: If the pointer cannot be parsed
    """
    if isinstance(pointer, list):
        tokens, text = pointer, "/" + "/".join(escape_token(t) for t in pointer)
    else:
        tokens, text = parse_pointer(pointer), pointer
    return _walk(document, tokens, text)


def exists(document: Any, pointer: str) -> bool:
    """Check whether pointer addresses an existing value."""
    try:
        resolve(document, pointer)
        return True
    except PathNotFoundError:
        return False


def locate(document: Any, pointer: str) -> Location:
    """Return the parent container and final token of pointer.

    The final token itself need not exist; only its parent must.

    Raises:
        MalformedPointerError: If pointer is the root (it has no parent)
        PathNotFoundError: If the parent does not exist or is a scalar
    """
    tokens = parse_pointer(pointer)
    if not tokens:
        raise MalformedPointerError(
            "The root pointer has no parent location",
            details={"pointer": pointer}
        )

    container = _walk(document, tokens[:-1], pointer)
    if not isinstance(container, (dict, list)):
        raise PathNotFoundError(
            f"Path '{pointer}' does not exist: parent is a {type(container).__name__}",
            details={"pointer": pointer}
        )

    logger.debug(f"Located '{pointer}' in {type(container).__name__} at key '{tokens[-1]}'")
    return Location(container, tokens[-1])
