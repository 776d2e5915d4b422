"""
Storage providers for the event log.

The log store never touches the filesystem directly; it goes through a
FileProvider so tests can substitute an in-memory backing store, existence
checks included.
"""

import logging
import os
from typing import Protocol, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class FileProvider(Protocol):
    def exists(self, path: PathLike) -> bool: ...

    def create(self, path: PathLike, data: str) -> None:
        """Create a new file whose only content is `data`."""

    def append(self, path: PathLike, data: str) -> None:
        """Append `data` with a single write, flushed to durable storage.

        Never creates the file: a missing file raises FileNotFoundError.
        """

    def read(self, path: PathLike) -> str: ...

    def size(self, path: PathLike) -> int: ...

    def truncate(self, path: PathLike, size: int) -> None: ...

    def remove(self, path: PathLike) -> None: ...


class LocalFileProvider:
    """FileProvider backed by the local filesystem (UTF-8 text)."""

    encoding = "utf-8"

    def exists(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def create(self, path: PathLike, data: str) -> None:
        parent = os.path.dirname(os.fspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        try:
            with open(path, "x", encoding=self.encoding, newline="") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
        except FileExistsError:
            raise
        except OSError:
            # A log file must never exist without its marker frame.
            if os.path.exists(path):
                os.remove(path)
            raise

    def append(self, path: PathLike, data: str) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND)
        with os.fdopen(fd, "a", encoding=self.encoding, newline="") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    def read(self, path: PathLike) -> str:
        with open(path, encoding=self.encoding, newline="", errors="replace") as f:
            return f.read()

    def size(self, path: PathLike) -> int:
        return os.path.getsize(path)

    def truncate(self, path: PathLike, size: int) -> None:
        logger.warning("Rolling %s back to %d bytes", os.fspath(path), size)
        os.truncate(path, size)

    def remove(self, path: PathLike) -> None:
        os.remove(path)
