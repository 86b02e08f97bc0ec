"""In-Memory Stores

Dictionary-backed stores, mainly for tests and prototyping.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..utils.errors import EntryNotFoundError, StoreError
from .types import (
    DeleteManyOutput,
    Entry,
    EntryId,
    MultiEntryDb,
    PredicateFn,
    SingleEntryDb,
    Updater,
    merge_update,
)

logger = logging.getLogger(__name__)


class SingleEntryMemDb(SingleEntryDb):
    """Single document held in memory."""

    def __init__(self, initial_entry: Any = None):
        self.entry = initial_entry

    def is_inited(self) -> bool:
        return self.entry is not None

    def read(self) -> Any:
        if self.entry is None:
            raise StoreError("Entry not initialized")
        return self.entry

    def write(self, entry_or_updater: Union[Any, Updater]) -> Any:
        """Replace the entry, or merge an updater's partial fields into it.

        Raises:
            StoreError: If an updater is given before the entry is initialized
        """
        if callable(entry_or_updater):
            if self.entry is None:
                raise StoreError(
                    "Cannot update uninitialized entry. Use write(entry) to initialize first."
                )
            entry = merge_update(self.entry, entry_or_updater)
        else:
            entry = entry_or_updater

        self.entry = entry
        return entry

    def delete(self) -> None:
        self.entry = None


class MultiEntryMemDb(MultiEntryDb):
    """Entries held in a dict keyed by id."""

    def __init__(self):
        self.entries: Dict[EntryId, Entry] = {}

    def create(self, entry: Entry) -> Entry:
        self.entries[entry["id"]] = entry
        logger.debug(f"Stored entry {entry['id']}")
        return entry

    def get_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        return self.entries.get(entry_id)

    def get_by_id_or_throw(self, entry_id: EntryId) -> Entry:
        entry = self.get_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(
                f"Entry with id {entry_id} does not exist",
                details={"id": entry_id}
            )
        return entry

    def get_where(self, predicate: PredicateFn, max: Optional[int] = None) -> List[Entry]:
        entries = [entry for entry in self.entries.values() if predicate(entry)]
        return entries[:max] if max is not None else entries

    def get_all(self, where_ids: Optional[List[EntryId]] = None) -> List[Entry]:
        if where_ids is None:
            return list(self.entries.values())
        return [self.entries[entry_id] for entry_id in where_ids if entry_id in self.entries]

    def get_all_ids(self) -> List[EntryId]:
        return list(self.entries.keys())

    def update(self, entry_id: EntryId, updater: Updater) -> Entry:
        """Merge updater's fields into an entry; a changed id moves the entry.

        Raises:
            EntryNotFoundError: If no entry has entry_id
        """
        entry = self.get_by_id_or_throw(entry_id)
        updated = merge_update(entry, updater)

        self.entries[updated["id"]] = updated
        if updated["id"] != entry_id:
            del self.entries[entry_id]

        return updated

    def delete(self, entry_id: EntryId) -> bool:
        return self.entries.pop(entry_id, None) is not None

    def delete_where(self, predicate: PredicateFn) -> DeleteManyOutput:
        output = DeleteManyOutput()
        for entry_id, entry in list(self.entries.items()):
            if not predicate(entry):
                continue
            if self.delete(entry_id):
                output.deleted_ids.append(entry_id)
            else:
                output.ignored_ids.append(entry_id)
        return output

    def destroy(self) -> None:
        self.entries.clear()

    def exists(self, entry_id: EntryId) -> bool:
        return entry_id in self.entries

    def count_all(self) -> int:
        return len(self.entries)
