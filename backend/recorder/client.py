"""
Public recording surface used by the host environment's hooks.

Each record_* call builds the event and hands it to the persistence gateway.
Expected failures come back as a RecordResult instead of an exception:

  InvalidArgument: a required field was null or empty
  IOFailure:       the log could not be written; the event was not recorded
"""

import logging
from typing import Any, Callable, Mapping, Optional

from config import DEFAULT_IDE
from errors import InvalidArgument, IOFailure
from models.event import Event, EventType
from models.result import RecordResult
from persistence.gateway import PersistenceGateway
from recorder import builder

logger = logging.getLogger(__name__)


class ClientRecorder:
    def __init__(self, gateway: PersistenceGateway, ide: str = DEFAULT_IDE):
        self.gateway = gateway
        self._ide = ide

    @property
    def ide(self) -> str:
        return self._ide

    @ide.setter
    def ide(self, value: str) -> None:
        self._ide = value

    # ---------- Recording ----------

    def record_text_change(
        self,
        text: Optional[str],
        offset: int,
        length: int,
        source_file: Optional[str],
        change_origin: Optional[str],
    ) -> RecordResult:
        return self._record(
            EventType.text_change,
            lambda: builder.build_text_change(
                text, offset, length, source_file, change_origin, ide=self._ide
            ),
        )

    def record_file_open(self, path: Optional[str]) -> RecordResult:
        return self._record_file(EventType.file_open, path)

    def record_file_close(self, path: Optional[str]) -> RecordResult:
        return self._record_file(EventType.file_close, path)

    def record_file_save(self, path: Optional[str]) -> RecordResult:
        return self._record_file(EventType.file_save, path)

    def record_test_run(self, test_address: Optional[str], test_result: Optional[str]) -> RecordResult:
        return self._record(
            EventType.test_run,
            lambda: builder.build_test_run(test_address, test_result, ide=self._ide),
        )

    def record_snapshot(self, path: Optional[str]) -> RecordResult:
        return self._record(
            EventType.snapshot,
            lambda: builder.build_snapshot(path, ide=self._ide),
        )

    def record_debug_launch(
        self,
        launch_time: Optional[str],
        entry_point: Optional[str],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> RecordResult:
        return self._record_launch(EventType.debug_launch, launch_time, entry_point, attributes)

    def record_normal_launch(
        self,
        launch_time: Optional[str],
        entry_point: Optional[str],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> RecordResult:
        return self._record_launch(EventType.normal_launch, launch_time, entry_point, attributes)

    def record_launch_end(self, launch_time: Optional[str]) -> RecordResult:
        return self._record(
            EventType.launch_end,
            lambda: builder.build_launch_end(launch_time, ide=self._ide),
        )

    # ---------- Helpers ----------

    def _record_file(self, kind: EventType, path: Optional[str]) -> RecordResult:
        return self._record(kind, lambda: builder.build_file_event(kind, path, ide=self._ide))

    def _record_launch(self, kind, launch_time, entry_point, attributes) -> RecordResult:
        return self._record(
            kind,
            lambda: builder.build_launch(kind, launch_time, entry_point, attributes, ide=self._ide),
        )

    def _record(self, kind: EventType, build: Callable[[], Event]) -> RecordResult:
        try:
            self.gateway.persist(build())
        except InvalidArgument as e:
            logger.warning("Rejected %s event: %s", kind.value, e)
            return RecordResult(ok=False, event_type=kind.value, error="InvalidArgument", detail=str(e))
        except IOFailure as e:
            logger.warning("Could not record %s event: %s", kind.value, e)
            return RecordResult(ok=False, event_type=kind.value, error="IOFailure", detail=str(e))
        return RecordResult(ok=True, event_type=kind.value)
