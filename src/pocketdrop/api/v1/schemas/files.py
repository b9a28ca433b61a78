# File browser schemas.
# Created: 2026-10-12

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from pocketdrop.core.models import DirectoryEntry, ListingResult


class FileEntry(BaseModel):
    """A single file or directory entry."""

    name: str
    type: Literal["file", "directory"]
    path: str
    isPreviewable: bool = False
    mediaType: Literal["image", "video"] | None = None
    size: int | None = None
    modified: float | None = None

    @classmethod
    def from_entry(cls, entry: DirectoryEntry) -> FileEntry:
        return cls(
            name=entry.name,
            type=entry.kind.value,
            path=entry.absolute_path,
            isPreviewable=entry.previewable,
            mediaType=entry.media_kind.value if entry.media_kind else None,
            size=entry.size,
            modified=entry.modified,
        )


class BrowseResponse(BaseModel):
    """File browser listing."""

    path: str
    parentPath: str
    entries: list[FileEntry] = []

    @classmethod
    def from_listing(cls, listing: ListingResult) -> BrowseResponse:
        return cls(
            path=listing.resolved_path,
            parentPath=listing.parent_path,
            entries=[FileEntry.from_entry(e) for e in listing.entries],
        )
