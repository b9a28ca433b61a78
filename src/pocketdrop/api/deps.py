# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-12
#
# The services live on ``app.state`` (built once by ``create_app``) and are
# handed to route handlers through ``Depends``.

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from pocketdrop.config import Settings
from pocketdrop.core.listing import DirectoryLister
from pocketdrop.core.shared_text import SharedTextStore
from pocketdrop.core.transfer import TransferService
from pocketdrop.errors import PocketDropError


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_lister(request: Request) -> DirectoryLister:
    return request.app.state.lister


def get_transfer_service(request: Request) -> TransferService:
    return request.app.state.transfer


def get_text_store(request: Request) -> SharedTextStore:
    return request.app.state.text_store


def error_response(exc: PocketDropError) -> JSONResponse:
    """Render a core error as the standard JSON error envelope."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
