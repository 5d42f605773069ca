"""FastAPI application entry point for the knowledge-base pages service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kbpages import __version__
from kbpages.core.database import init_db
from kbpages.core.router import register_routes
from kbpages.logging.config import configure_logging
from kbpages.logging.exception_handlers import register_exception_handlers
from kbpages.logging.middleware import LoggingMiddleware


def create_app() -> FastAPI:

    configure_logging()
    app = FastAPI(
        title="kbpages",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    init_db()

    # Request logger middleware
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, replace with specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app
