# Health schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness plus the directories the server is working with."""

    status: str = "ok"
    version: str
    browseRoot: str
    uploadDir: str
