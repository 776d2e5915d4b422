import threading

import pytest

from persistence.gateway import PersistenceGateway
from persistence.log_store import LogStore
from recorder.client import ClientRecorder

LOG_PATH = "session-test.events"


class MemoryFileProvider:
    """In-memory FileProvider. Files can be deleted or made to fail on demand."""

    def __init__(self):
        self.files: dict[str, str] = {}
        self.fail_writes = False
        self.torn_write: str = ""     # appended before a failing write raises
        self._lock = threading.Lock()

    def exists(self, path) -> bool:
        return str(path) in self.files

    def create(self, path, data: str) -> None:
        with self._lock:
            if self.fail_writes:
                raise PermissionError(13, "Permission denied", str(path))
            if str(path) in self.files:
                raise FileExistsError(17, "File exists", str(path))
            self.files[str(path)] = data

    def append(self, path, data: str) -> None:
        with self._lock:
            if str(path) not in self.files:
                raise FileNotFoundError(2, "No such file or directory", str(path))
            if self.fail_writes:
                self.files[str(path)] += self.torn_write
                raise OSError(28, "No space left on device", str(path))
            self.files[str(path)] += data

    def read(self, path) -> str:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", str(path))

    def size(self, path) -> int:
        return len(self.read(path))

    def truncate(self, path, size: int) -> None:
        self.files[str(path)] = self.files[str(path)][:size]

    def remove(self, path) -> None:
        with self._lock:
            if str(path) not in self.files:
                raise FileNotFoundError(2, "No such file or directory", str(path))
            del self.files[str(path)]

    # ---------- Test helpers ----------

    def delete(self, path=None) -> None:
        if path is None:
            self.files.clear()
        else:
            self.files.pop(str(path), None)

    def content(self, path=LOG_PATH) -> str:
        return self.files.get(str(path), "")


@pytest.fixture
def provider():
    return MemoryFileProvider()


@pytest.fixture
def store(provider):
    return LogStore(LOG_PATH, provider=provider, ide="eclipse")


@pytest.fixture
def gateway(provider):
    gw = PersistenceGateway(LOG_PATH, provider=provider, ide="eclipse")
    yield gw
    gw.reset()


@pytest.fixture
def recorder(gateway):
    return ClientRecorder(gateway, ide="eclipse")
