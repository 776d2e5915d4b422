from enum import Enum
from typing import Any

# An event is an ordered mapping of field name -> value, exactly as it is
# serialized into the log.
Event = dict[str, Any]


class EventType(str, Enum):
    text_change = "textChange"
    file_open = "fileOpen"
    file_close = "fileClose"
    file_save = "fileSave"
    test_run = "testRun"
    snapshot = "snapshot"
    debug_launch = "debugLaunch"
    normal_launch = "normalLaunch"
    launch_end = "launchEnd"
    file_init = "FileInit"      # session marker, written by the log store only


class ChangeOrigin(str, Enum):
    user = "user"
    refresh = "refresh"
    refactoring = "refactoring"
    ui_event = "ui-event"


# ---------- JSON field names ----------

IDE = "IDE"
EVENT_TYPE = "eventType"
TIMESTAMP = "timestamp"
TEXT = "text"
OFFSET = "offset"
LENGTH = "len"
ENTITY_ADDRESS = "entityAddress"
CHANGE_ORIGIN = "changeOrigin"
TEST_RESULT = "testResult"
LAUNCH_ATTRIBUTES = "launchConfiguration"
LAUNCH_TIMESTAMP = "launchTimestamp"
