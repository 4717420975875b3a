"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.database import is_database_configured, reset_database_cache
from shared.exceptions import FundsEdgeError
from modules.admin.routes import router as admin_router
from modules.analytics.routes import router as track_router
from modules.auth.routes import router as auth_router
from modules.billing.routes import router as stripe_router
from modules.features.routes import router as features_router
from modules.sitelock.routes import router as sitelock_router

from .dependencies import get_container
from .models.errors import ErrorResponse
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs schema setup on startup and closes the pool on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    if is_database_configured():
        await get_container().schema.initialize()
    else:
        logger.warning("DATABASE_URL not set, running without a database")

    yield

    logger.info(f"Shutting down {settings.app_name}")
    reset_database_cache()


async def handle_app_error(request: Request, exc: FundsEdgeError) -> JSONResponse:
    """Render a FundsEdgeError with the status carried by its class."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(**exc.to_dict()).model_dump(),
        headers=headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 INVALID_INPUT."""
    body = ErrorResponse(
        error="INVALID_INPUT",
        message="Invalid request",
        details={"errors": [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]},
    )
    return JSONResponse(status_code=400, content=body.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled exception as a generic 500 INTERNAL_ERROR."""
    logger.exception(f"{request.method} {request.url.path} failed: {exc}")
    body = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, payments, analytics and site controls for FundsEdge",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(FundsEdgeError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(stripe_router, prefix="/api/stripe", tags=["stripe"])
    app.include_router(track_router, prefix="/api/track", tags=["track"])
    app.include_router(sitelock_router, prefix="/api/settings", tags=["settings"])
    app.include_router(features_router, prefix="/api/features", tags=["features"])

    return app


# Application instance for uvicorn
app = create_app()
