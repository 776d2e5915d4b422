"""
Shared entry point through which every event is persisted.

One gateway is built at startup (see main.create_app) and handed to whoever
records events. It owns a single LogStore, created on first use and kept for
the gateway's lifetime. Tests swap the storage provider or drop the store
through use_file_provider() / reset().
"""

import logging
import threading
from typing import Any, Mapping, Optional

from errors import InvalidArgument
from persistence.log_store import LogStore
from persistence.storage import FileProvider, LocalFileProvider, PathLike

logger = logging.getLogger(__name__)


class PersistenceGateway:
    def __init__(
        self,
        path: PathLike,
        provider: Optional[FileProvider] = None,
        ide: Optional[str] = None,
    ):
        self.path = path
        self.ide = ide
        self._provider = provider or LocalFileProvider()
        self._store: Optional[LogStore] = None
        self._lock = threading.Lock()

    @property
    def store(self) -> LogStore:
        with self._lock:
            if self._store is None:
                self._store = LogStore(self.path, provider=self._provider, ide=self.ide)
            return self._store

    def persist(self, event: Optional[Mapping[str, Any]]) -> None:
        """Durably append `event`. Raises InvalidArgument or IOFailure."""
        if event is None:
            raise InvalidArgument("Cannot persist a null event")
        if not isinstance(event, Mapping):
            raise InvalidArgument(f"Event must be a mapping, got {type(event).__name__}")
        self.store.append(event)

    def ensure_initialized(self) -> None:
        self.store.ensure_initialized()

    def read_events(self) -> list[dict[str, Any]]:
        return self.store.read_events()

    # ---------- Test seams ----------
    # Neither hook waits for in-flight persist() calls. Swapping while another
    # thread is appending leaves two stores, each with its own lock, on the
    # same path; call these only while no caller is recording.

    def use_file_provider(self, provider: FileProvider) -> None:
        """Replace the backing storage; the next call builds a fresh store on it."""
        with self._lock:
            self._provider = provider
            self._store = None
        logger.debug("File provider replaced with %s", type(provider).__name__)

    def reset(self) -> None:
        with self._lock:
            self._store = None
