"""FastAPI application for the weigh-in REST API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..db.engine import get_db_path, init_db
from .routers import settings, weight

API_PREFIX = "/api/v1"


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Database file to serve; defaults to the data directory
    """
    resolved_db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - runs on startup and shutdown."""
        # Schema creation is idempotent
        await init_db(resolved_db_path)
        yield

    app = FastAPI(
        title="weigh-in",
        description="Personal body-composition tracker API",
        version=__version__,
        lifespan=lifespan,
    )

    # Routers read the database location from app state
    app.state.db_path = resolved_db_path

    app.include_router(settings.router, prefix=API_PREFIX)
    app.include_router(weight.router, prefix=API_PREFIX)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
