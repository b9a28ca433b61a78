# Health router.
# Created: 2026-10-12

from __future__ import annotations

from fastapi import APIRouter, Depends

from pocketdrop import __version__
from pocketdrop.api.deps import get_app_settings, get_transfer_service
from pocketdrop.api.v1.schemas.health import HealthResponse
from pocketdrop.config import Settings
from pocketdrop.core.transfer import TransferService

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def get_health(
    settings: Settings = Depends(get_app_settings),
    service: TransferService = Depends(get_transfer_service),
):
    return HealthResponse(
        version=__version__,
        browseRoot=str(settings.browse_root),
        uploadDir=str(service.upload_dir),
    )
