# kbpages/logging/service.py
"""Service layer for reading and writing request logs."""

import getpass
import os
import platform
import socket
from typing import List, Optional

from kbpages.core import config
from kbpages.core.database import SessionLocal
from kbpages.logging.dao import LogDAO
from kbpages.logging.schemas import LogRead


def _current_username() -> str:
    try:
        return os.environ.get("USER") or os.environ.get("USERNAME") or getpass.getuser() or "unknown_user"
    except Exception:
        return "unknown_user"


def _current_hostname() -> str:
    try:
        return socket.gethostname() or platform.node() or "unknown_host"
    except Exception:
        return "unknown_host"


USERNAME = _current_username()
HOSTNAME = _current_hostname()


class LogService:
    """Reads request logs for the API."""

    def __init__(self, log_dao: LogDAO):
        self.dao = log_dao

    def get_recent_logs(self, limit: int = 50, status_min: Optional[int] = None) -> List[LogRead]:
        return [LogRead.model_validate(log) for log in self.dao.get_recent(limit, status_min)]

    def get_log(self, log_id: int) -> Optional[LogRead]:
        log = self.dao.get_by_id(log_id)
        return LogRead.model_validate(log) if log else None


def persist_log(**fields) -> None:
    """Write one log row in its own session, stamped with user, host and application id."""
    fields.setdefault("username", USERNAME)
    fields.setdefault("hostname", HOSTNAME)
    fields.setdefault("application_id", config.APPLICATION_ID)

    with SessionLocal() as session:
        LogDAO(session).create(**fields)
