# FastAPI application factory - wires settings, request logging, routers and error handlers

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from elbprobe.api import errors, health, info, ping
from elbprobe.core.config import Settings, get_settings
from elbprobe.core.middleware import install_request_middleware
from elbprobe.core.request_log import FileLogSink, LogSink, RequestLogger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info(f"Serving on port {settings.port} ({settings.environment})")
    yield
    logger.info("Shutting down gracefully")


def create_app(settings: Optional[Settings] = None, sink: Optional[LogSink] = None) -> FastAPI:
    """
    Build the probe service.

    Args:
        settings: Settings to serve with. Read from the environment when omitted.
        sink: Where request log entries go. Defaults to daily files under settings.log_dir.
    """
    settings = settings or get_settings()
    sink = sink or FileLogSink(settings.log_dir)

    app = FastAPI(
        title="ELB Probe",
        version=settings.app_version,
        lifespan=lifespan,
        # Only the probe routes answer; no docs or schema pages
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # "/health/" is an unmatched route, not a redirect
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.request_logger = RequestLogger(sink)

    app.include_router(info.router, tags=["info"])
    app.include_router(health.router, tags=["health"])
    app.include_router(ping.router, tags=["ping"])

    errors.register_error_handlers(app)
    install_request_middleware(app, app.state.request_logger)

    return app
