"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCustomerRepository, run_migrations
from src.adapters.scheduler import DailySweepScheduler
from src.api.dependencies import get_clock
from src.api.errors import register_exception_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.expiry import ExpirySweeper

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account Opening API v1 - Start, pause, resume and validate registrations",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Starts the daily expiry sweep
    - Stops the sweep and closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    scheduler = None
    if settings.expiry_sweep_enabled:
        clock = get_clock()
        sweeper = ExpirySweeper(
            repository=PostgresCustomerRepository(pool),
            clock=clock,
            expiry_days=settings.expiry_days,
        )
        scheduler = DailySweepScheduler(sweeper, clock, settings.expiry_sweep_hour)
        scheduler.start()
    else:
        logger.info("Expiry sweep disabled")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if scheduler is not None:
        await scheduler.stop()
    pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="account-opening",
    description="Account Opening API - Registration workflow with pause, resume and expiry",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
