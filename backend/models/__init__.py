from models.event import ChangeOrigin, Event, EventType
from models.result import RecordResult

__all__ = ["ChangeOrigin", "Event", "EventType", "RecordResult"]
