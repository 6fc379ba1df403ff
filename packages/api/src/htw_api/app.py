"""FastAPI application factory."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from htw_shared.config import settings
from htw_pipeline.utils.logging import configure_logging

from htw_api import __version__
from htw_api.errors import register_error_handlers
from htw_api.middleware.logging import LoggingMiddleware
from htw_api.routers.health import router as health_router
from htw_api.routers.v1 import v1_router

logger = structlog.get_logger()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="HTW Network API",
        description="Directory, bulk import and analytics for the Hawaii tech network",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(v1_router)

    logger.info("app_created", cors_origins=settings.cors_origins_list)
    return app
