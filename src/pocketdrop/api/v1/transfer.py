# Transfer router - streaming downloads and multipart uploads.
# Created: 2026-10-12

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from pocketdrop.api.deps import error_response, get_app_settings, get_transfer_service
from pocketdrop.api.v1.schemas.common import ErrorResponse
from pocketdrop.api.v1.schemas.transfer import UploadResponse
from pocketdrop.config import Settings
from pocketdrop.core.paths import resolve
from pocketdrop.core.transfer import TransferService
from pocketdrop.errors import InvalidRequestError, PocketDropError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Transfer"])


def content_disposition(filename: str) -> str:
    """``attachment`` header with an ASCII fallback and an RFC 5987 name."""
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "") or "download"
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


async def _iter_upload(upload: UploadFile, chunk_size: int) -> AsyncIterator[bytes]:
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        yield chunk


@router.get(
    "/download",
    response_class=StreamingResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def download_file(
    path: str = "",
    settings: Settings = Depends(get_app_settings),
    service: TransferService = Depends(get_transfer_service),
):
    """Stream a file back as an attachment."""
    try:
        if not path.strip():
            raise InvalidRequestError("Missing 'path' query parameter")
        resolved = await asyncio.to_thread(resolve, path, settings.browse_root)
        download = await service.open_download(resolved)
    except PocketDropError as exc:
        logger.info(f"Download failed for {path!r}: {exc.message}")
        return error_response(exc)

    headers = {
        "Content-Disposition": content_disposition(download.name),
        "Content-Length": str(download.size),
    }
    return StreamingResponse(
        download.iter_chunks(),
        media_type=download.media_type,
        headers=headers,
        background=BackgroundTask(download.close),
    )


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": UploadResponse}},
)
async def upload_files(
    response: Response,
    files: list[UploadFile] | None = File(default=None),
    service: TransferService = Depends(get_transfer_service),
):
    """Save one or more files into the upload directory."""
    items = [
        (upload.filename, _iter_upload(upload, service.chunk_size)) for upload in files or []
    ]
    try:
        result = await service.receive_uploads(items)
    except PocketDropError as exc:
        return error_response(exc)

    if result.files_accepted == 0:
        response.status_code = 500
    logger.info(
        f"Upload request: {result.files_accepted} accepted, {result.files_failed} failed"
    )
    return UploadResponse.from_result(result)
