from typing import Literal, Optional
from pydantic import BaseModel


class RecordResult(BaseModel):
    ok: bool
    event_type: Optional[str] = None
    error: Optional[Literal["InvalidArgument", "IOFailure"]] = None
    detail: Optional[str] = None    # human-readable failure reason
