"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.books import router as books_router
from app.api.home import router as home_router
from app.core.config import get_settings
from app.core.database import dialect, engine, init_db
from app.core.logging import setup_logging
from app.core.tracing import setup_tracing, shutdown_tracing

logger = logging.getLogger(__name__)

settings = get_settings()
setup_logging(settings.log_level, sql_echo=settings.database_echo)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"Starting {settings.app_name} ({settings.environment}) on {dialect.name}")
    await init_db()
    yield
    # Shutdown
    await engine.dispose()
    shutdown_tracing()


app = FastAPI(
    title=settings.app_name,
    description="CRUD REST API for managing a bookstore inventory",
    version="0.1.0",
    lifespan=lifespan,
)

# Setup OpenTelemetry tracing (must be done before adding routes)
setup_tracing(app)

# Include routers
app.include_router(home_router)
app.include_router(books_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
