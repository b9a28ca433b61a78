# Shared text router - one snippet every device can read and replace.
# Created: 2026-10-12

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from pocketdrop.api.deps import error_response, get_text_store
from pocketdrop.api.v1.schemas.common import ErrorResponse
from pocketdrop.api.v1.schemas.text import TextResponse, TextUpdateResponse
from pocketdrop.core.shared_text import SharedTextStore
from pocketdrop.errors import InvalidRequestError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Text"])


@router.get("/text", response_model=TextResponse)
async def get_text(store: SharedTextStore = Depends(get_text_store)):
    """Get the current shared text."""
    snapshot = store.snapshot()
    return TextResponse(text=snapshot.text, version=snapshot.version)


@router.post(
    "/text",
    response_model=TextUpdateResponse,
    responses={400: {"model": ErrorResponse}},
)
async def set_text(request: Request, store: SharedTextStore = Depends(get_text_store)):
    """Replace the shared text. ``{"text": ""}`` clears it."""
    try:
        data = await request.json()
    except ValueError:
        return error_response(InvalidRequestError("Request body must be JSON"))

    if not isinstance(data, dict) or "text" not in data:
        return error_response(InvalidRequestError("Expected a JSON object with a 'text' field"))

    try:
        text = store.set(data["text"])
    except InvalidRequestError as exc:
        return error_response(exc)

    logger.debug(f"Shared text updated ({len(text)} chars)")
    return TextUpdateResponse(success=True, text=text)
