# Root endpoint - welcome message, version, endpoint map and server info

import logging

from fastapi import APIRouter, Depends

from elbprobe.api.deps import app_settings
from elbprobe.core.config import Settings
from elbprobe.models.schemas import InfoResponse, ServerInfo
from elbprobe.services.system_service import server_address

router = APIRouter()
logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to the ELB Probe Service"


@router.get("/", response_model=InfoResponse)
async def read_root(settings: Settings = Depends(app_settings)):
    logger.info("Root endpoint accessed")
    return InfoResponse(
        message=WELCOME_MESSAGE,
        version=settings.app_version,
        server_info=ServerInfo(
            address=server_address(),
            port=settings.port,
            environment=settings.environment,
        ),
    )
