# Request middleware - logs every request before routing, turns unhandled errors into 500s

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from elbprobe.core.request_log import RequestLogger
from elbprobe.models.schemas import ErrorResponse
from elbprobe.services.system_service import isoformat_utc, utc_now

logger = logging.getLogger(__name__)


def install_request_middleware(app: FastAPI, request_logger: RequestLogger) -> None:
    """Register the log-then-route middleware on the app."""

    @app.middleware("http")
    async def log_and_route(request: Request, call_next):
        received_at = utc_now()
        # Monotonic receipt time, used for /ping/detailed latency
        request.state.received_at = time.perf_counter()

        await request_logger.log_request(request, received_at)

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error for {request.method} {request.url.path}")
            body = ErrorResponse(
                error="Internal Server Error",
                message=str(e),
                timestamp=isoformat_utc(),
            )
            return JSONResponse(status_code=500, content=body.model_dump())
