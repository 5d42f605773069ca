# kbpages/logging/router.py
"""API router for persisted request logs."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from kbpages.core.dependencies import SessionDep
from kbpages.logging.dao import LogDAO
from kbpages.logging.schemas import LogRead
from kbpages.logging.service import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


def get_log_service(session: SessionDep) -> LogService:
    return LogService(LogDAO(session))


@router.get("/", response_model=List[LogRead])
def get_logs(
    limit: int = Query(50, ge=1, le=1000, description="Maximum number of logs to return"),
    status_min: Optional[int] = Query(None, ge=100, le=599, description="Minimum status code"),
    log_service: LogService = Depends(get_log_service),
) -> List[LogRead]:
    """Most recent request logs, newest first."""
    return log_service.get_recent_logs(limit=limit, status_min=status_min)


@router.get("/{log_id}", response_model=LogRead)
def get_log_by_id(log_id: int, log_service: LogService = Depends(get_log_service)) -> LogRead:
    log = log_service.get_log(log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Log not found")
    return log
