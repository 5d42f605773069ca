"""Request log table."""

from datetime import datetime
from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text
from kbpages.core.database import Base


class Log(Base):
    """One API request, or one handled error, kept for troubleshooting calls to SharePoint."""

    __tablename__ = "request_log"
    __table_args__ = (Index("ix_request_log_status_timestamp", "status_code", "timestamp"),)

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, default=datetime.now, nullable=False)
    method = Column(String(10), nullable=False)
    path = Column(String(500), nullable=False)
    status_code = Column(Integer, nullable=False)
    duration_ms = Column(Float)

    # Bodies are truncated before they get here
    request_body = Column(Text)
    response_body = Column(Text)

    # Set when the failure came from SharePoint rather than from this service
    error_type = Column(String(100))
    upstream_status = Column(Integer)

    client_ip = Column(String(45))
    user_agent = Column(String(500))
    username = Column(String(100))
    hostname = Column(String(255))
    application_id = Column(String(50))
