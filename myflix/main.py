"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from myflix import __version__
from myflix.api.routes.router import api_router
from myflix.config import Settings, get_settings
from myflix.core.exceptions import register_exception_handlers
from myflix.core.logging import get_logger, setup_logging
from myflix.core.middleware import RequestLoggingMiddleware
from myflix.core.security import TokenCodec
from myflix.database import create_engine, create_session_factory, create_tables

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the database engine on startup and disposes of it on shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if settings.create_tables:
        await create_tables(engine)

    logger.info(
        "Starting %s v%s",
        settings.app_name,
        __version__,
        extra={"environment": settings.environment, "debug": settings.debug},
    )
    yield

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with, loaded from the environment if omitted.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="A REST API for browsing movies and keeping a list of favorites.",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_codec = TokenCodec.from_settings(settings)

    # Register exception handlers
    register_exception_handlers(app)

    # Add middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()
