"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT
from ..config.cors import CORS_CONFIG
from ..utils.logging_config import setup_logging
from ..db import Database, DatabaseConfig
from .. import __version__
from .errors import register_exception_handlers
from .routes import (
    auth,
    categories,
    dashboard,
    events,
    health,
    reviews,
    users
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

def create_application(database_config: Optional[DatabaseConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database_config: Database settings; read from the environment when omitted.
                         The Database itself is created at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager owning the database connection pool."""
        # Startup
        try:
            database = Database(database_config)
            database.init_db()
            app.state.db = database
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise
        yield
        # Shutdown
        database.dispose()

    app = FastAPI(
        title="Evently API",
        description="API for browsing, creating and reviewing events",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    register_exception_handlers(app)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(auth.router, prefix="/api")
    app.include_router(events.router, prefix="/api")
    app.include_router(categories.router, prefix="/api")
    app.include_router(reviews.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")

    return app

# Create the application instance
app = create_application()
