"""JSON Parser with Field Coercion

Decodes JSON text, then coerces selected fields to richer Python types
(datetime, int, float, str, bool) by building `replace` operations and
running them through the patch engine.

NOTE: datetimes are written back as ISO 8601 by dumps(); strings in other
formats are rejected rather than guessed at.
"""

import json
import logging
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from .builder import JsonPatchBuilder
from .patcher import JsonPatcher
from .utils.errors import JsonKitError, ParseError, PathNotFoundError
from .utils.json_patch import JsonPath, join_path
from .utils.pointer import resolve

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class JsonFieldConversion(str, Enum):
    """Target type for a coerced field."""

    DATE = "date"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"


class ParseField(BaseModel):
    """A field to coerce after decoding."""

    path: JsonPath = Field(description="Field location, e.g. 'createdAt' or ['user', 'age']")
    conversion: JsonFieldConversion = Field(description="Target type")

    class Config:
        frozen = True


def _parse_datetime(value: str) -> datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ParseError(
            f"Invalid date value '{value}'",
            details={"value": value}
        ) from e


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def convert_value(value: Any, conversion: JsonFieldConversion) -> Any:
    """Coerce a decoded value. None passes through untouched.

    Args:
        value: Decoded JSON value
        conversion: Target type

    Returns:
        Converted value; unparseable int/float strings become None
    """
    if value is None:
        return value

    is_string = isinstance(value, str)

    if conversion == JsonFieldConversion.DATE and is_string:
        return _parse_datetime(value)
    elif conversion == JsonFieldConversion.STRING:
        return _to_string(value)
    elif conversion == JsonFieldConversion.INT and is_string:
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    elif conversion == JsonFieldConversion.FLOAT and is_string:
        match = _LEADING_FLOAT.match(value)
        return float(match.group(1)) if match else None
    elif conversion == JsonFieldConversion.BOOLEAN:
        if is_string and value == "false":
            return False
        # Arrays and objects are present values, so they count as true even when empty
        if isinstance(value, (dict, list)):
            return True
        return bool(value)

    return value


def _default(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any, indent: Optional[int] = None) -> str:
    """Serialize a value to JSON text, rendering datetimes as ISO 8601."""
    return json.dumps(value, indent=indent, default=_default, ensure_ascii=False)


class JsonParser:
    """Decode JSON text and coerce configured fields.

    Example:
        parser = JsonParser([ParseField(path="createdAt", conversion=JsonFieldConversion.DATE)])
        entry = parser.parse('{"createdAt": "2024-01-01T00:00:00Z"}')
    """

    def __init__(self, parsed_fields: Sequence[ParseField] = ()):
        self.parsed_fields = list(parsed_fields)

    def parse(self, text: str) -> Any:
        """Decode text and apply field coercions.

        Raises:
            ParseError: If text isn't valid JSON or a coercion can't be applied
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e}", details={"position": e.pos}) from e

        if not self.parsed_fields:
            return raw

        builder = JsonPatchBuilder()
        for parse_field in self.parsed_fields:
            pointer = join_path(parse_field.path)
            try:
                value = resolve(raw, pointer)
            except PathNotFoundError:
                logger.debug(f"Skipping missing parse field '{pointer}'")
                continue
            except JsonKitError as e:
                raise ParseError(f"Failed to parse JSON: {e}", details={"path": pointer}) from e

            builder.replace(pointer, convert_value(value, parse_field.conversion))

        result = JsonPatcher().apply_safe(raw, builder.patches())
        if not result.success:
            raise ParseError(f"Failed to parse JSON: {result.error}") from result.error

        return result.data
