"""Filesystem Helpers

Thin wrapper over pathlib/shutil used by the file-backed stores. Writes go
through a temporary file and an atomic rename, retried on transient OS
errors (e.g. a file briefly locked by another process on Windows).
"""

import logging
import os
import shutil
import tempfile
from datetime import datetime
from itertools import islice
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..config import load_settings
from ..utils.errors import StoreError
from .types import FileMeta, FileType

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

TRANSIENT_ERRORS = (PermissionError, BlockingIOError, InterruptedError, TimeoutError)


class FilesService:
    """File operations with parent-directory creation and retried writes."""

    def __init__(self, encoding: Optional[str] = None, write_retries: Optional[int] = None):
        """Initialize files service.

        Args:
            encoding: Text encoding (default: JSONKIT_ENCODING or utf-8)
            write_retries: Attempts per write (default: JSONKIT_WRITE_RETRIES or 3)

        Raises:
            StoreError: If write_retries is less than 1
        """
        settings = load_settings()
        self.encoding = encoding or settings.encoding
        self.write_retries = write_retries if write_retries is not None else settings.write_retries
        if self.write_retries < 1:
            raise StoreError(
                f"write_retries must be at least 1, got {self.write_retries}",
                details={"write_retries": self.write_retries}
            )

    def write(self, filepath: PathLike, content: str) -> None:
        """Write text atomically, creating parent directories.

        Raises:
            OSError: If the write still fails after all retries
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        @retry(
            stop=stop_after_attempt(self.write_retries),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True
        )
        def _write_with_retry():
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding=self.encoding) as handle:
                    handle.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        try:
            _write_with_retry()
            logger.debug(f"Wrote {len(content)} chars to {path}")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise

    def read(self, filepath: PathLike, lines: Optional[int] = None) -> str:
        """Read text, optionally only the first `lines` lines."""
        path = Path(filepath)
        if lines is None:
            return path.read_text(encoding=self.encoding)

        with path.open("r", encoding=self.encoding) as handle:
            return "".join(islice(handle, lines))

    def touch(self, filepath: PathLike) -> None:
        if not self.exists(filepath):
            self.write(filepath, "")

    def mkdir(self, dirpath: PathLike) -> None:
        Path(dirpath).mkdir(parents=True, exist_ok=True)

    def delete(self, filepath: PathLike, force: bool = True, recursive: bool = True) -> None:
        """Delete a file or directory.

        Args:
            force: Ignore a missing path
            recursive: Allow deleting non-empty directories

        Raises:
            FileNotFoundError: If path is missing and force is False
        """
        path = Path(filepath)
        if not path.exists() and not path.is_symlink():
            if force:
                return
            raise FileNotFoundError(f"No such file or directory: '{path}'")

        if path.is_dir() and not path.is_symlink():
            if recursive:
                shutil.rmtree(path)
            else:
                path.rmdir()
        else:
            path.unlink()

    def move(self, old_path: PathLike, new_path: PathLike) -> None:
        os.replace(old_path, new_path)

    def copy(self, source: PathLike, destination: PathLike, recursive: bool = False, overwrite: bool = True) -> None:
        """Copy a file, or a directory tree when recursive is set.

        Raises:
            StoreError: If destination exists and overwrite is False, or
                source is a directory and recursive is False
        """
        source_path, destination_path = Path(source), Path(destination)

        if not overwrite and destination_path.exists():
            raise StoreError(f"Destination '{destination_path}' already exists")

        if source_path.is_dir():
            if not recursive:
                raise StoreError(f"'{source_path}' is a directory (use recursive option)")
            shutil.copytree(source_path, destination_path, dirs_exist_ok=True)
            return

        destination_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source_path, destination_path)

    def exists(self, filepath: PathLike) -> bool:
        return Path(filepath).exists()

    def is_dir(self, filepath: PathLike) -> bool:
        return Path(filepath).is_dir()

    def is_file(self, filepath: PathLike) -> bool:
        return Path(filepath).is_file()

    def list(self, dirpath: PathLike, depth: int = 0, strip_basepath: Optional[PathLike] = None) -> List[str]:
        """List directory entries.

        With depth 0 only names are returned; with depth > 0 the listing
        recurses and returns full paths (relative to strip_basepath if given).
        """
        if depth > 0:
            return list(self._list_recursive(Path(dirpath), depth, 0, strip_basepath))
        return sorted(os.listdir(dirpath))

    def list_read(self, dirpath: PathLike, depth: int = 0) -> Iterator[Tuple[str, str]]:
        """Yield (path, content) for readable files under dirpath."""
        root = Path(dirpath)
        names = self.list(root, depth=depth)
        for name in names:
            path = Path(name) if depth > 0 else root / name
            if not path.is_file():
                continue
            try:
                yield str(path), self.read(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping unreadable file {path}: {e}")

    def get_meta(self, filepath: PathLike, depth: int = 0, strip_basepath: Optional[PathLike] = None) -> FileMeta:
        """Return metadata, including children down to `depth` for directories.

        Raises:
            StoreError: If path is neither a regular file nor a directory
        """
        path = Path(filepath)
        stats = path.stat()
        common = {
            "path": self._strip_basepath(path, strip_basepath),
            "size": stats.st_size,
            "created": datetime.fromtimestamp(stats.st_ctime),
            "modified": datetime.fromtimestamp(stats.st_mtime),
            "accessed": datetime.fromtimestamp(stats.st_atime),
        }

        if path.is_dir():
            children = []
            if depth > 0:
                for name in self.list(path):
                    children.append(
                        self.get_meta(path / name, depth=depth - 1, strip_basepath=strip_basepath)
                    )
            return FileMeta(type=FileType.DIRECTORY, children=children, **common)

        if path.is_file():
            return FileMeta(type=FileType.FILE, **common)

        raise StoreError(f"File at {path} is not normal file or directory")

    def _list_recursive(
        self,
        dirpath: Path,
        max_depth: int,
        current_depth: int,
        strip_basepath: Optional[PathLike]
    ) -> Iterator[str]:
        for entry in sorted(dirpath.iterdir()):
            yield self._strip_basepath(entry, strip_basepath)
            if entry.is_dir() and current_depth < max_depth:
                yield from self._list_recursive(entry, max_depth, current_depth + 1, strip_basepath)

    @staticmethod
    def _strip_basepath(path: Path, basepath: Optional[PathLike]) -> str:
        if not basepath:
            return str(path)
        try:
            return "/" + path.relative_to(basepath).as_posix()
        except ValueError:
            return str(path)
