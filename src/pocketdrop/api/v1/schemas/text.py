# Shared text schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel


class TextResponse(BaseModel):
    text: str
    version: int = 0


class TextUpdateResponse(BaseModel):
    success: bool = True
    text: str
