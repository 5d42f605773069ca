# kbpages/core/router.py
"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from kbpages.pages.router import router as pages_router, lists_router
from kbpages.columns.router import router as columns_router
from kbpages.logging.router import router as log_router


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(pages_router, prefix="/api")
    app.include_router(lists_router, prefix="/api")
    app.include_router(columns_router, prefix="/api")
    app.include_router(log_router, prefix="/api")
