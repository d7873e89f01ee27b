"""FastAPI application factory and lifespan management."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ffmpeg_processor.api.dependencies import (
    get_settings,
    init_services,
    shutdown_services,
)
from ffmpeg_processor.api.middleware.error_handler import error_handler_middleware
from ffmpeg_processor.api.middleware.logging import LoggingMiddleware
from ffmpeg_processor.api.openapi.routes import health, media
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.commons.telemetry import configure_logging
from ffmpeg_processor.commons.telemetry.logger import JsonFormatter, TextFormatter


APP_LOGGER = "ffmpeg_processor"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _log_level(settings: Settings) -> str:
    return (settings.telemetry.log_level or settings.app.log_level).upper()


def _formatter(settings: Settings) -> logging.Formatter:
    if settings.telemetry.log_format == "json":
        return JsonFormatter()
    return TextFormatter(use_colors=sys.stdout.isatty())


def _setup_logging() -> None:
    """Install our handler on the package logger at import time."""
    settings = get_settings()
    configure_logging(
        level=_log_level(settings),
        format_type=settings.telemetry.log_format,
        logger_name=APP_LOGGER,
    )
    logging.getLogger().setLevel(_log_level(settings))


def _configure_uvicorn_logging() -> None:
    """Give uvicorn's loggers our formatter once its handlers exist."""
    settings = get_settings()
    level = _log_level(settings)
    formatter = _formatter(settings)

    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.setLevel(level)
        if not uv_logger.handlers:
            uv_logger.addHandler(logging.StreamHandler(sys.stdout))
            uv_logger.propagate = False
        for handler in uv_logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)


_setup_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown.

    Creates the upload and output directories and checks for the ffmpeg
    executables on startup.
    """
    _configure_uvicorn_logging()

    await init_services(get_settings())

    yield

    await shutdown_services()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Resize videos and extract audio with FFmpeg",
        docs_url="/docs" if settings.server.docs_enabled else None,
        redoc_url="/redoc" if settings.server.docs_enabled else None,
        openapi_url="/openapi.json" if settings.server.docs_enabled else None,
        lifespan=lifespan,
    )

    _configure_middleware(app, settings)
    _register_routes(app, settings)

    return app


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure application middleware.

    The last one added runs outermost, so error envelopes still pass through
    request logging (``X-Request-ID``) and CORS.
    """
    app.middleware("http")(error_handler_middleware)

    app.add_middleware(LoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes and the static output mount."""
    app.include_router(health.router, tags=["Health"])
    app.include_router(
        media.router, prefix=settings.server.api_prefix, tags=["Media"]
    )

    # Produced files are served from the output directory
    app.mount(
        settings.server.output_url_prefix,
        StaticFiles(directory=settings.storage.output_dir, check_dir=False),
        name="output",
    )


app = create_app()
