import time
import logging
from datetime import datetime
from typing import Callable, List

from fastapi import Request
from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from kbpages.logging.service import persist_log

logger = logging.getLogger(__name__)

MAX_LOGGED_BODY = 4000


def _truncate(text: str) -> str:
    return text if len(text) <= MAX_LOGGED_BODY else text[:MAX_LOGGED_BODY] + "...[truncated]"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Times each API request and stores it as a Log row once the response is sent."""

    def __init__(self, app: ASGIApp, excluded_paths: List[str] = None):
        super().__init__(app)
        self.excluded_paths = excluded_paths or ["/api/logs", "/api/docs", "/api/redoc", "/api/openapi.json"]

    async def dispatch(self, request: Request, call_next: Callable):
        if any(request.url.path.startswith(path) for path in self.excluded_paths):
            return await call_next(request)

        start_time = time.time()

        body_bytes = await request.body()
        request_body = body_bytes.decode("utf-8", errors="ignore")

        # Body was consumed above; hand the endpoint a fresh receive channel
        async def receive() -> dict:
            return {"type": "http.request", "body": body_bytes, "more_body": False}

        request = Request(request.scope, receive=receive)
        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        logger.info(f"{request.method} {request.url.path} {status_code} {duration_ms:.1f}ms")

        chunks: List[bytes] = []
        if hasattr(response, "body_iterator"):
            original_iterator = response.body_iterator

            async def buffer_iterator():
                async for chunk in original_iterator:
                    chunks.append(chunk)
                    yield chunk

            response.body_iterator = buffer_iterator()

        def log_to_db():
            try:
                persist_log(
                    timestamp=datetime.now(),
                    method=request.method,
                    path=str(request.url.path),
                    status_code=status_code,
                    client_ip=request.client.host if request.client else None,
                    request_body=_truncate(request_body),
                    response_body=_truncate(b"".join(chunks).decode("utf-8", errors="ignore")),
                    duration_ms=duration_ms,
                    user_agent=request.headers.get("user-agent"),
                )
            except Exception as e:
                logger.warning(f"Could not persist request log: {e}")

        response.background = BackgroundTask(log_to_db)
        return response
