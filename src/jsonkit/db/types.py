"""Store Types

Abstract store interfaces and their result models. Stores are plain CRUD
over a map or a directory: not concurrent, not transactional, and not meant
for production workloads.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

Entry = Dict[str, Any]
EntryId = str
Updater = Callable[[Entry], Mapping[str, Any]]
PredicateFn = Callable[[Entry], bool]


class DeleteManyOutput(BaseModel):
    """Ids removed by a bulk delete, and ids that matched but could not be removed."""

    deleted_ids: List[EntryId] = Field(default_factory=list)
    ignored_ids: List[EntryId] = Field(default_factory=list)


class FileType(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class FileMeta(BaseModel):
    """Filesystem metadata for a file or directory."""

    path: str
    type: FileType
    size: int
    created: datetime
    modified: datetime
    accessed: datetime
    children: List["FileMeta"] = Field(default_factory=list, description="Directory entries (directories only)")


def merge_update(entry: Entry, updater: Updater) -> Entry:
    """Shallow-merge the fields returned by updater into a copy of entry."""
    updated_fields = updater(dict(entry))
    return {**entry, **dict(updated_fields or {})}


class SingleEntryDb(ABC):
    """Store holding exactly one JSON document."""

    @abstractmethod
    def is_inited(self) -> bool:
        ...

    @abstractmethod
    def read(self) -> Any:
        ...

    @abstractmethod
    def write(self, entry_or_updater: Union[Any, Updater]) -> Any:
        ...

    @abstractmethod
    def delete(self) -> None:
        ...


class MultiEntryDb(ABC):
    """Store of JSON objects keyed by their `id` field."""

    @abstractmethod
    def create(self, entry: Entry) -> Entry:
        ...

    @abstractmethod
    def get_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        ...

    @abstractmethod
    def get_by_id_or_throw(self, entry_id: EntryId) -> Entry:
        ...

    @abstractmethod
    def get_where(self, predicate: PredicateFn, max: Optional[int] = None) -> List[Entry]:
        ...

    @abstractmethod
    def get_all(self, where_ids: Optional[List[EntryId]] = None) -> List[Entry]:
        ...

    @abstractmethod
    def get_all_ids(self) -> List[EntryId]:
        ...

    @abstractmethod
    def update(self, entry_id: EntryId, updater: Updater) -> Entry:
        ...

    @abstractmethod
    def delete(self, entry_id: EntryId) -> bool:
        ...

    @abstractmethod
    def delete_where(self, predicate: PredicateFn) -> DeleteManyOutput:
        ...

    @abstractmethod
    def destroy(self) -> None:
        ...

    @abstractmethod
    def exists(self, entry_id: EntryId) -> bool:
        ...

    @abstractmethod
    def count_all(self) -> int:
        ...

    def delete_by_ids(self, entry_ids: List[EntryId]) -> DeleteManyOutput:
        wanted = set(entry_ids)
        return self.delete_where(lambda entry: entry.get("id") in wanted)

    def count_where(self, predicate: PredicateFn) -> int:
        return len(self.get_where(predicate))
