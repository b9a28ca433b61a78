# File browser router - directory listing.
# Created: 2026-10-12

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends

from pocketdrop.api.deps import error_response, get_app_settings, get_lister
from pocketdrop.api.v1.schemas.common import ErrorResponse
from pocketdrop.api.v1.schemas.files import BrowseResponse
from pocketdrop.config import Settings
from pocketdrop.core.listing import DirectoryLister
from pocketdrop.core.paths import resolve
from pocketdrop.errors import PocketDropError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


@router.get(
    "/files",
    response_model=BrowseResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def browse_files(
    path: str = "",
    settings: Settings = Depends(get_app_settings),
    lister: DirectoryLister = Depends(get_lister),
):
    """List a directory. Defaults to the configured browse root."""
    try:
        resolved = await asyncio.to_thread(resolve, path, settings.browse_root)
        listing = await asyncio.to_thread(lister.list_directory, resolved)
    except PocketDropError as exc:
        logger.info(f"Browse failed for {path or '<root>'}: {exc.message}")
        return error_response(exc)

    return BrowseResponse.from_listing(listing)
