"""FastAPI application entry point with global error handling."""
from __future__ import annotations

import os
import sys

# Add src/ to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.logging_config import get_logger, setup_logging
from core.exceptions import (
    ReferralMatcherError,
    ConfigurationError,
    ExportError,
    ValidationError,
)
from api.routes import analysis, health

LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Sets up logging and logs startup/shutdown events.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_format == "json")

    LOGGER.info(
        "API application starting",
        extra={"extra_data": {
            "environment": settings.environment,
            "normalization_mode": settings.normalization_mode,
            "reward_tiers": settings.reward_tiers,
        }}
    )
    yield
    LOGGER.info("API application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance with:
        - CORS middleware
        - Global exception handlers
        - All API routes
    """
    application = FastAPI(
        title="Referral Reward Matcher",
        description="Matches masked referrer addresses against a reward schedule",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Global Exception Handlers
    # -------------------------------------------------------------------------

    @application.exception_handler(ValidationError)
    async def validation_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle invalid caller input."""
        LOGGER.warning(f"Validation error: {exc}", extra={"extra_data": {"path": request.url.path}})
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": str(exc),
            },
        )

    @application.exception_handler(ExportError)
    async def export_handler(
        request: Request, exc: ExportError
    ) -> JSONResponse:
        """Handle unsupported export requests."""
        LOGGER.warning(f"Export error: {exc}", extra={"extra_data": {"path": request.url.path}})
        return JSONResponse(
            status_code=400,
            content={
                "error": "export_error",
                "message": str(exc),
            },
        )

    @application.exception_handler(ConfigurationError)
    async def configuration_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Handle configuration errors."""
        LOGGER.error(f"Configuration error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "configuration_error",
                "message": "Service misconfiguration",
                "detail": "Please contact the administrator.",
            },
        )

    @application.exception_handler(ReferralMatcherError)
    async def app_error_handler(
        request: Request, exc: ReferralMatcherError
    ) -> JSONResponse:
        """Handle all other application errors."""
        LOGGER.error(f"Application error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "application_error",
                "message": str(exc),
            },
        )

    # -------------------------------------------------------------------------
    # Include Routers
    # -------------------------------------------------------------------------
    application.include_router(health.router, prefix="/health", tags=["Health"])
    application.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])

    return application


app = create_app()
