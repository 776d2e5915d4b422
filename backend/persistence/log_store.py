"""
Durable, append-only event log for one recording session.

Layout on disk: a sequence of RS/LF frames (see persistence.framing).
The first frame of every file lifetime is the FileInit marker; events follow
in append order. The file may be deleted from outside at any time: the next
append recreates it, marker first, without the caller noticing.

`initialized` is only a hint. Existence is checked on every
ensure_initialized() call, under the same lock that serializes appends.
"""

import logging
import os
import threading
from typing import Any, Mapping, Optional

from errors import FrameDecodeError, IOFailure
from persistence import framing
from persistence.storage import FileProvider, LocalFileProvider, PathLike
from recorder.builder import build_marker

logger = logging.getLogger(__name__)


class LogStore:
    def __init__(
        self,
        path: PathLike,
        provider: Optional[FileProvider] = None,
        ide: Optional[str] = None,
    ):
        self.path = path
        self.provider = provider or LocalFileProvider()
        self.ide = ide
        self.initialized = False
        self._lock = threading.Lock()

    # ---------- Public API ----------

    def ensure_initialized(self) -> None:
        with self._lock:
            self._ensure_initialized()

    def append(self, event: Mapping[str, Any]) -> None:
        """Append one framed event. Raises InvalidArgument or IOFailure.

        Either the whole frame reaches the file or the file is left exactly
        as it was. A log recreated by this call is removed again when the
        frame cannot be written.
        """
        data = framing.frame(event)
        with self._lock:
            created = self._ensure_initialized()
            try:
                try:
                    self._write(data)
                except FileNotFoundError:
                    logger.warning("Event log %s vanished before write, recreating", os.fspath(self.path))
                    created = self._ensure_initialized()
                    self._write(data)
            except OSError as e:
                if created:
                    self._discard()
                if isinstance(e, IOFailure):
                    raise
                raise IOFailure(f"Event log {os.fspath(self.path)} vanished during append: {e}") from e

    def read_frames(self) -> list[str]:
        with self._lock:
            try:
                if not self.provider.exists(self.path):
                    return []
                raw = self.provider.read(self.path)
            except OSError as e:
                raise IOFailure(f"Cannot read event log {os.fspath(self.path)}: {e}") from e
        return framing.scan(raw)

    def read_events(self) -> list[dict[str, Any]]:
        """Decode every recorded frame; frames with a corrupt body are skipped."""
        events = []
        for index, payload in enumerate(self.read_frames()):
            try:
                events.append(framing.decode(payload))
            except FrameDecodeError as e:
                logger.warning("Skipping frame %d of %s: %s", index, os.fspath(self.path), e)
        return events

    # ---------- Internals (caller holds the lock) ----------

    def _ensure_initialized(self) -> bool:
        """Return True when this call created the file."""
        try:
            if self.provider.exists(self.path):
                self.initialized = True
                return False

            if self.initialized:
                logger.info("Event log %s disappeared, recreating", os.fspath(self.path))

            self.provider.create(self.path, framing.frame(build_marker(self.ide)))
        except OSError as e:
            self.initialized = False
            logger.error("Cannot initialize event log %s: %s", os.fspath(self.path), e)
            raise IOFailure(f"Cannot initialize event log {os.fspath(self.path)}: {e}") from e

        self.initialized = True
        logger.info("Initialized event log %s", os.fspath(self.path))
        return True

    def _write(self, data: str) -> None:
        """Raises FileNotFoundError untouched when the file is gone, IOFailure otherwise."""
        try:
            size_before = self.provider.size(self.path)
        except FileNotFoundError:
            raise
        except OSError as e:
            raise IOFailure(f"Cannot open event log {os.fspath(self.path)}: {e}") from e

        try:
            self.provider.append(self.path, data)
        except FileNotFoundError:
            raise
        except OSError as e:
            logger.error("Append to %s failed: %s", os.fspath(self.path), e)
            self._rollback(size_before)
            raise IOFailure(f"Cannot append to event log {os.fspath(self.path)}: {e}") from e

    def _rollback(self, size: int) -> None:
        try:
            if self.provider.size(self.path) > size:
                self.provider.truncate(self.path, size)
        except OSError as e:
            # A torn tail is still invisible to scan(): it has no closing LF.
            logger.error("Rollback of %s failed: %s", os.fspath(self.path), e)

    def _discard(self) -> None:
        try:
            self.provider.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Cannot remove event log %s: %s", os.fspath(self.path), e)
        self.initialized = False
