"""Pydantic schemas for the logging module API."""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class LogRead(BaseModel):
    """A persisted request log as returned by /api/logs."""

    id: int
    timestamp: datetime
    method: str
    path: str
    status_code: int
    duration_ms: Optional[float] = None
    request_body: Optional[str] = None
    response_body: Optional[str] = None
    error_type: Optional[str] = None
    upstream_status: Optional[int] = None
    client_ip: Optional[str] = None
    user_agent: Optional[str] = None
    username: Optional[str] = None
    hostname: Optional[str] = None
    application_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
