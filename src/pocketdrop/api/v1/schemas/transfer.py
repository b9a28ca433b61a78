# Upload schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel

from pocketdrop.core.models import UploadResult


class UploadedFileInfo(BaseModel):
    """Outcome for one uploaded file."""

    name: str
    savedAs: str
    size: int = 0
    ok: bool = True
    error: str | None = None


class UploadResponse(BaseModel):
    """Summary of an upload request."""

    filesAccepted: int
    filesFailed: int
    uploadDir: str
    files: list[UploadedFileInfo] = []

    @classmethod
    def from_result(cls, result: UploadResult) -> UploadResponse:
        return cls(
            filesAccepted=result.files_accepted,
            filesFailed=result.files_failed,
            uploadDir=result.upload_dir,
            files=[
                UploadedFileInfo(
                    name=f.name, savedAs=f.saved_as, size=f.size, ok=f.ok, error=f.error
                )
                for f in result.files
            ],
        )
