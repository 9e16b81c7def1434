"""
FastAPI application entry point.

Initializes FastAPI app, registers routers and configures lifespan.

Dependencies: fastapi, jobstatus.api, jobstatus.observability, jobstatus.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobstatus.api import api_router
from jobstatus.configs import get_settings
from jobstatus.dependencies import get_service_cache
from jobstatus.observability.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the status store, runtime adapter and job service once, and
    installs the enqueue hook before any request is served.
    """
    # Startup
    configure_logging()
    logger.info("Application startup: logging configured")

    get_service_cache().initialize()
    logger.info("Application startup complete: job tracking services initialized")

    yield

    # Shutdown
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Job Status API",
        description="Progress and status tracking for background jobs",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "jobstatus.api.main:app",
        host="localhost",
        port=8082,
        reload=settings.debug,
    )
