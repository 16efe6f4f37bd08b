# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""ClaimDesk - Main Application Module."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from beartype import beartype
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from .api.v1 import router as v1_router
from .api.v1.health import API_VERSION
from .core.config import get_settings
from .core.database import get_database
from .core.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


class APIInfo(BaseModel):
    """API information returned by the root endpoint."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    name: str
    version: str
    status: str
    environment: str


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.api_env)

    db = get_database()
    await db.connect()

    yield

    logger.info("Shutting down %s", settings.app_name)
    await db.disconnect()


@beartype
def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    configure_logging(level=settings.log_level)
    # Module loggers may have configured logging before settings were read.
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Insurance claims back office: users, policies and claims",
        version=API_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router)

    @app.get("/")
    async def root() -> APIInfo:
        """Root endpoint returning API information."""
        return APIInfo(
            name=settings.app_name,
            version=API_VERSION,
            status="operational",
            environment=settings.api_env,
        )

    return app


# Create the application instance
app = create_app()


@beartype
def main() -> None:
    """Run the main application entry point."""
    settings = get_settings()

    uvicorn.run(
        "claimdesk.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level="info" if not settings.is_production else "error",
    )


if __name__ == "__main__":
    main()
