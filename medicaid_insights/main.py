"""
FastAPI application entry point for the Medicaid Insights API.

Configures logging and CORS, loads the Aggregate Store at startup, and registers
the chart, insight, outlier and federal routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from medicaid_insights import __version__
from medicaid_insights.api import api_router
from medicaid_insights.core.config import get_settings
from medicaid_insights.core.database import close_db, init_db
from medicaid_insights.core.dependencies import get_aggregate_store

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize the database pool when DATABASE_URL is set
        - Load the Aggregate Store from the first configured source

    On shutdown:
        - Close the database pool
    """
    logger.info("Medicaid Insights API starting")
    store = get_aggregate_store()
    try:
        pool = await init_db() if settings.database_url else None
        await store.load(settings, pool)
        logger.info(f"Aggregate Store loaded from {store.source}: {store.get_snapshot().slice_sizes()}")
    except Exception as e:
        logger.error(f"Failed to load Aggregate Store: {e}", exc_info=True)
        # Keep serving: an empty snapshot leaves every rule silent

    yield

    logger.info("Medicaid Insights API shutting down")
    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


app = FastAPI(
    title="Medicaid Insights API",
    version=__version__,
    description=(
        "Descriptive statistics and narrative insights over precomputed Medicaid "
        "provider spending aggregates: chart payloads, templated insights, "
        "z-score outliers and federal funding analysis."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and load balancer probes."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {
        "name": "Medicaid Insights API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "medicaid_insights.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
