"""File-Backed Stores

SingleEntryFileDb keeps one JSON document in one file; MultiEntryFileDb
keeps one `<id>.json` file per entry in a directory. Neither is safe for
concurrent writers.
"""

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

from pydantic import BaseModel, Field

from ..config import load_settings
from ..parser import JsonParser, dumps
from ..utils.errors import EntryNotFoundError, ParseError, ValidationError
from .files import FilesService, PathLike
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

ENTRY_SUFFIX = ".json"


class MultiEntryFileDbOptions(BaseModel):
    """Options for MultiEntryFileDb."""

    no_pathlike_ids: bool = Field(
        default=True,
        description="Reject ids containing path separators"
    )
    parser: Optional[JsonParser] = Field(
        default=None,
        description="Parser used to decode entry files (default: plain JSON)"
    )

    class Config:
        arbitrary_types_allowed = True


class SingleEntryFileDb(SingleEntryDb):
    """Single JSON document persisted to one file."""

    def __init__(
        self,
        filepath: PathLike,
        parser: Optional[JsonParser] = None,
        indent: Optional[int] = None,
        files: Optional[FilesService] = None
    ):
        self.filepath = Path(filepath)
        self.parser = parser or JsonParser()
        self.indent = indent if indent is not None else load_settings().indent
        self.files = files or FilesService()

    def path(self) -> Path:
        return self.filepath

    def is_inited(self) -> bool:
        return self.files.exists(self.filepath)

    def read(self) -> Any:
        """Read and decode the document.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ParseError: If the file isn't valid JSON
        """
        text = self.files.read(self.filepath)
        return self.parser.parse(text)

    def write(self, entry_or_updater: Union[Any, Updater]) -> Any:
        """Write the document, or merge an updater's fields into the stored one.

        Raises:
            FileNotFoundError: If an updater is given and the file doesn't exist
        """
        if callable(entry_or_updater):
            entry = merge_update(self.read(), entry_or_updater)
        else:
            entry = entry_or_updater

        self.files.write(self.filepath, dumps(entry, indent=self.indent))
        logger.info(f"Wrote entry to {self.filepath}")
        return entry

    def delete(self) -> None:
        self.files.delete(self.filepath)
        logger.info(f"Deleted {self.filepath}")


class MultiEntryFileDb(MultiEntryDb):
    """Entries persisted as `<id>.json` files in a directory."""

    def __init__(
        self,
        dirpath: PathLike,
        options: Optional[MultiEntryFileDbOptions] = None,
        indent: Optional[int] = None,
        files: Optional[FilesService] = None
    ):
        self.dirpath = Path(dirpath)
        self.options = options or MultiEntryFileDbOptions()
        self.parser = self.options.parser or JsonParser()
        self.indent = indent if indent is not None else load_settings().indent
        self.files = files or FilesService()

    def is_id_valid(self, entry_id: EntryId) -> bool:
        """Check whether entry_id may be used as a file name."""
        if not self.options.no_pathlike_ids:
            return True
        return "/" not in entry_id and "\\" not in entry_id

    def create(self, entry: Entry) -> Entry:
        self._write_entry(entry)
        return entry

    def get_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        return self._read_entry(entry_id)

    def get_by_id_or_throw(self, entry_id: EntryId) -> Entry:
        entry = self._read_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(
                f"Entry with id {entry_id} does not exist",
                details={"id": entry_id, "dirpath": str(self.dirpath)}
            )
        return entry

    def get_where(self, predicate: PredicateFn, max: Optional[int] = None) -> List[Entry]:
        entries = [entry for entry in self.get_all() if predicate(entry)]
        return entries[:max] if max is not None else entries

    def get_all(self, where_ids: Optional[List[EntryId]] = None) -> List[Entry]:
        ids = self.get_all_ids() if where_ids is None else where_ids
        entries = []
        for entry_id in ids:
            entry = self._read_entry(entry_id)
            if entry is not None:
                entries.append(entry)
        return entries

    def get_all_ids(self) -> List[EntryId]:
        if not self.files.is_dir(self.dirpath):
            return []
        return [
            name[:-len(ENTRY_SUFFIX)]
            for name in self.files.list(self.dirpath)
            if name.endswith(ENTRY_SUFFIX)
        ]

    def update(self, entry_id: EntryId, updater: Updater) -> Entry:
        """Merge updater's fields into an entry; a changed id renames its file.

        Raises:
            EntryNotFoundError: If no entry has entry_id
        """
        entry = self.get_by_id_or_throw(entry_id)
        updated = merge_update(entry, updater)
        self._write_entry(updated)

        if updated["id"] != entry_id:
            self.delete(entry_id)

        return updated

    def delete(self, entry_id: EntryId) -> bool:
        try:
            self.files.delete(self._get_file_path(entry_id), force=False)
        except FileNotFoundError:
            return False
        logger.info(f"Deleted entry {entry_id} from {self.dirpath}")
        return True

    def delete_where(self, predicate: PredicateFn) -> DeleteManyOutput:
        output = DeleteManyOutput()
        for entry in self._iter_entries():
            if not predicate(entry):
                continue
            if self.delete(entry["id"]):
                output.deleted_ids.append(entry["id"])
            else:
                output.ignored_ids.append(entry["id"])
        return output

    def destroy(self) -> None:
        self.files.delete(self.dirpath)
        logger.info(f"Destroyed store at {self.dirpath}")

    def exists(self, entry_id: EntryId) -> bool:
        return self._read_entry(entry_id) is not None

    def count_all(self) -> int:
        return len(self.get_all_ids())

    def _get_file_path(self, entry_id: EntryId) -> Path:
        if not self.is_id_valid(entry_id):
            raise ValidationError(
                f"Invalid entry id '{entry_id}': path-like ids are not allowed",
                details={"id": entry_id}
            )
        return self.dirpath / f"{entry_id}{ENTRY_SUFFIX}"

    def _read_entry(self, entry_id: EntryId) -> Optional[Entry]:
        filepath = self._get_file_path(entry_id)
        try:
            text = self.files.read(filepath)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable entry file {filepath}: {e}")
            return None

        try:
            entry = self.parser.parse(text)
        except ParseError as e:
            logger.warning(f"Skipping invalid entry file {filepath}: {e}")
            return None

        if not isinstance(entry, dict) or "id" not in entry:
            logger.warning(f"Skipping entry file {filepath}: not an object with an 'id' key")
            return None
        return entry

    def _write_entry(self, entry: Entry) -> None:
        filepath = self._get_file_path(entry["id"])
        self.files.write(filepath, dumps(entry, indent=self.indent))
        logger.info(f"Wrote entry {entry['id']} to {self.dirpath}")

    def _iter_entries(self) -> Iterator[Entry]:
        for entry_id in self.get_all_ids():
            entry = self._read_entry(entry_id)
            if entry is not None:
                yield entry
