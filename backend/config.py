"""
Recorder configuration.

All values come from the environment (a .env file is loaded by main.py
before this is read):
  COPE_IDE=eclipse
  COPE_LOG_DIR=./cope-logs
  COPE_SESSION_ID=session-20260101-120000
  COPE_LOG_LEVEL=INFO
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

DEFAULT_IDE = "eclipse"
DEFAULT_LOG_DIR = "cope-logs"
LOG_FILE_SUFFIX = ".events"


@dataclass(frozen=True)
class Settings:
    ide: str
    log_dir: Path
    session_id: str
    log_level: str = "INFO"

    @property
    def log_path(self) -> Path:
        return self.log_dir / f"{self.session_id}{LOG_FILE_SUFFIX}"


def _default_session_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.strftime("session-%Y%m%d-%H%M%S")


def load_settings(env: Optional[dict] = None) -> Settings:
    env = os.environ if env is None else env

    ide = env.get("COPE_IDE") or DEFAULT_IDE
    log_dir = Path(env.get("COPE_LOG_DIR") or DEFAULT_LOG_DIR)
    session_id = env.get("COPE_SESSION_ID") or _default_session_id()
    log_level = (env.get("COPE_LOG_LEVEL") or "INFO").upper()

    return Settings(ide=ide, log_dir=log_dir, session_id=session_id, log_level=log_level)
