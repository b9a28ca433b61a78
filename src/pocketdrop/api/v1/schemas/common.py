# Common API response schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel


class APIResponse(BaseModel):
    """Base response wrapper."""

    model_config = {"from_attributes": True}


class ErrorResponse(APIResponse):
    """Standard error envelope.

    ``path``/``parentPath`` echo the attempted location so a client can retry
    or navigate up after a failure.
    """

    detail: str
    code: str | None = None
    path: str | None = None
    parentPath: str | None = None
