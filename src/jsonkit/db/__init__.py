"""jsonkit Stores

Simple key/value stores backed by memory or the filesystem. They are not
concurrent or transactional and are not intended for production workloads.
"""

from .types import DeleteManyOutput, FileMeta, FileType, MultiEntryDb, SingleEntryDb
from .files import FilesService
from .memory import MultiEntryMemDb, SingleEntryMemDb
from .file_db import MultiEntryFileDb, MultiEntryFileDbOptions, SingleEntryFileDb

__all__ = [
    "DeleteManyOutput",
    "FileMeta",
    "FileType",
    "FilesService",
    "MultiEntryDb",
    "MultiEntryFileDb",
    "MultiEntryFileDbOptions",
    "MultiEntryMemDb",
    "SingleEntryDb",
    "SingleEntryFileDb",
    "SingleEntryMemDb",
]
