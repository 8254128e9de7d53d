# Ping endpoints - "pong" for connectivity testing, with an optional latency/headers variant

import logging
import time

from fastapi import APIRouter, Request

from elbprobe.core.request_log import client_address
from elbprobe.models.schemas import PingResponse
from elbprobe.services.system_service import isoformat_utc, server_address

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/ping", response_model=PingResponse, response_model_exclude_none=True)
async def ping(request: Request):
    logger.info("Ping request received")
    return PingResponse(
        timestamp=isoformat_utc(),
        server_address=server_address(),
        client_address=client_address(request),
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/ping/detailed", response_model=PingResponse, response_model_exclude_none=True)
async def ping_detailed(request: Request):
    """
    Ping with the time spent since the request was received and the full
    set of request headers.
    """
    received_at = getattr(request.state, "received_at", None) or time.perf_counter()

    logger.info("Detailed ping request received")
    response = PingResponse(
        timestamp=isoformat_utc(),
        server_address=server_address(),
        client_address=client_address(request),
        user_agent=request.headers.get("user-agent"),
        headers=dict(request.headers),
    )
    response.latency_ms = round(max(0.0, (time.perf_counter() - received_at) * 1000), 3)
    return response
