# kbpages/logging/dao.py
"""Data access for persisted request logs."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from kbpages.logging.models import Log


class LogDAO:
    """Reads and writes Log rows within one session."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, **fields) -> Log:
        log = Log(**fields)
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def get_by_id(self, log_id: int) -> Optional[Log]:
        return self.db.get(Log, log_id)

    def get_recent(self, limit: int = 50, status_min: Optional[int] = None) -> List[Log]:
        """Newest logs first, optionally only those at or above a status code."""
        query = select(Log)
        if status_min is not None:
            query = query.where(Log.status_code >= status_min)
        query = query.order_by(Log.timestamp.desc(), Log.id.desc()).limit(limit)
        return list(self.db.execute(query).scalars().all())
