# kbpages/logging/exception_handlers.py

import json
import logging
import traceback
from datetime import datetime

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kbpages.core.exceptions import GatewayError, QueryCompilationError, UnknownColumnTypeError
from kbpages.logging.service import persist_log

logger = logging.getLogger(__name__)


def safe_json_dumps(obj) -> str:
    return json.dumps(obj, indent=2, default=str)


def _log_error(request: Request, status_code: int, payload, exc: Exception) -> None:
    """Persist a handled error; a failing log write must not mask the original error."""
    try:
        persist_log(
            timestamp=datetime.now(),
            method=request.method,
            path=str(request.url.path),
            status_code=status_code,
            client_ip=request.client.host if request.client else None,
            response_body=safe_json_dumps(payload),
            user_agent=request.headers.get("user-agent"),
            error_type=type(exc).__name__,
            upstream_status=exc.status_code if isinstance(exc, GatewayError) else None,
        )
    except Exception as log_error:
        logger.warning(f"Error logging exception: {log_error}")


async def query_error_handler(request: Request, exc: ValueError):
    """Filter values or column types the query layer cannot encode."""
    content = {"detail": str(exc)}
    _log_error(request, 422, content, exc)
    return JSONResponse(status_code=422, content=content)


async def gateway_exception_handler(request: Request, exc: GatewayError):
    """The SharePoint store failed or answered with something unusable."""
    logger.error(f"Remote store error on {request.url.path}: {exc}")
    content = {"detail": str(exc), "upstream_status": exc.status_code}
    _log_error(request, 502, content, exc)
    return JSONResponse(status_code=502, content=content)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = json.loads(safe_json_dumps(exc.errors()))
    _log_error(request, 422, errors, exc)
    return JSONResponse(status_code=422, content={"detail": errors})


async def http_exception_handler(request: Request, exc: HTTPException):
    if exc.status_code >= 400:
        _log_error(request, exc.status_code, {"detail": exc.detail}, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Anything unhandled: log the traceback, answer with a bare 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    _log_error(
        request,
        500,
        {"error": str(exc), "type": type(exc).__name__, "traceback": traceback.format_exc()},
        exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_exception_handlers(app) -> None:
    app.add_exception_handler(QueryCompilationError, query_error_handler)
    app.add_exception_handler(UnknownColumnTypeError, query_error_handler)
    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
