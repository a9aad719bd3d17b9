# ============================================================================
# HEALTH AGGREGATOR - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Serve the dependency health report
# ============================================================================
"""
Health Aggregator Main Application

FastAPI application that:
1. Loads probe settings from the environment once at startup
2. Registers the dependency probes
3. Serves /livez and /api/health

Usage:
    uvicorn main:app --host 0.0.0.0 --port 3000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE

# Health check system
from health import health_router, get_default_registry
from core.config import get_settings

from core.logging import configure_logging, get_logger

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Registers probes and loads settings on startup.
    """
    logger.info(f"Starting Health Aggregator v{__version__} (Build {BUILD_DATE})")

    settings = get_settings()
    logger.info(f"Configured settings: {', '.join(settings.configured()) or 'none'}")

    get_default_registry()

    yield

    logger.info("Health Aggregator stopped")


# Create FastAPI app
app = FastAPI(
    title="Health Aggregator",
    description="Dependency health checks for PostgreSQL, S3, SES and TCP endpoints",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware (dashboard may be served from another origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include health check routes (/livez, /api/health)
app.include_router(health_router)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Health Aggregator",
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
        "health": "/api/health",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
