"""FastAPI application for the hoop-metrics API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from .. import __version__
from ..agents import AITrainer
from ..config import Settings, get_settings
from ..db.engine import init_db, seed_catalog
from ..log import setup_logger
from .errors import register_exception_handlers
from .routers import ai, auth, dashboard, inbox, plans, profile, sessions, user_plans, workouts


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Startup: make sure schema and catalog exist
    db_path = app.state.db_path
    await init_db(db_path)
    await seed_catalog(db_path)
    logger.info(f"hoop-metrics API ready (database: {db_path})")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    setup_logger(settings)

    app = FastAPI(
        title="hoop-metrics",
        description="Basketball training tracker API",
        version=__version__,
        lifespan=lifespan,
    )

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    app.state.settings = settings
    app.state.db_path = settings.database_path
    app.state.trainer = AITrainer(settings=settings)

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(dashboard.router)
    app.include_router(workouts.router)
    app.include_router(sessions.router)
    app.include_router(inbox.router)
    app.include_router(plans.router)
    app.include_router(user_plans.router)
    app.include_router(ai.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
