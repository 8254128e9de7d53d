# Error responses - JSON bodies for unmatched routes

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from elbprobe.core.request_log import request_url
from elbprobe.models.schemas import ErrorResponse
from elbprobe.services.system_service import isoformat_utc

logger = logging.getLogger(__name__)

# A known path with the wrong method is still an unmatched route
NOT_FOUND_STATUSES = (404, 405)


def not_found_response(request: Request) -> JSONResponse:
    url = request_url(request)
    logger.info(f"404 - Route not found: {request.method} {url}")
    body = ErrorResponse(
        error="Not Found",
        message=f"Route {request.method} {url} not found",
        timestamp=isoformat_utc(),
    )
    return JSONResponse(status_code=404, content=body.model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in NOT_FOUND_STATUSES:
        return not_found_response(request)

    body = ErrorResponse(
        error="HTTP Error",
        message=str(exc.detail),
        timestamp=isoformat_utc(),
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
