"""JSON Patch Builder

Fluent accumulation of patch operations. See https://jsonpatch.com for the
operation semantics.
"""

from typing import Any, Dict, List, Optional

from .models.operation import (
    AddOperation,
    CopyOperation,
    MoveOperation,
    RemoveOperation,
    ReplaceOperation,
    TestOperation,
)
from .utils.json_patch import JsonPath, join_path


class JsonPatchBuilder:
    """Chainable builder for JSON Patch operation lists.

    Example:
        patches = JsonPatchBuilder().add("name", "John").remove(["user", "age"]).patches()
    """

    def __init__(self, patches: Optional[List[Any]] = None):
        self._patches: List[Any] = list(patches) if patches else []

    def add(self, path: JsonPath, value: Any) -> "JsonPatchBuilder":
        self._patches.append(AddOperation(path=join_path(path), value=value))
        return self

    def remove(self, path: JsonPath) -> "JsonPatchBuilder":
        self._patches.append(RemoveOperation(path=join_path(path)))
        return self

    def replace(self, path: JsonPath, value: Any) -> "JsonPatchBuilder":
        self._patches.append(ReplaceOperation(path=join_path(path), value=value))
        return self

    def move(self, from_path: JsonPath, to_path: JsonPath) -> "JsonPatchBuilder":
        self._patches.append(MoveOperation(from_=join_path(from_path), path=join_path(to_path)))
        return self

    def copy(self, from_path: JsonPath, to_path: JsonPath) -> "JsonPatchBuilder":
        self._patches.append(CopyOperation(from_=join_path(from_path), path=join_path(to_path)))
        return self

    def test(self, path: JsonPath, value: Any) -> "JsonPatchBuilder":
        self._patches.append(TestOperation(path=join_path(path), value=value))
        return self

    def patches(self) -> List[Any]:
        """Return a deep copy of the accumulated operations."""
        return [patch.model_copy(deep=True) for patch in self._patches]

    def wire(self) -> List[Dict[str, Any]]:
        """Return the accumulated operations as RFC 6902 dicts."""
        return [patch.to_wire() for patch in self._patches]

    def clear(self) -> "JsonPatchBuilder":
        self._patches = []
        return self

    def __len__(self) -> int:
        return len(self._patches)
