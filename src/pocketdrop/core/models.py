"""Data models for directory listings and uploads.

Created: 2026-10-12

Plain dataclasses; the API layer converts them to pydantic response models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Filesystem type of a listed entry."""

    FILE = "file"
    DIRECTORY = "directory"


class MediaKind(str, Enum):
    """Kind of inline preview a client can render."""

    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a listed directory."""

    name: str
    kind: EntryKind
    absolute_path: str
    previewable: bool = False
    media_kind: MediaKind | None = None
    size: int | None = None
    modified: float | None = None

    def __post_init__(self) -> None:
        if self.kind is EntryKind.DIRECTORY and (self.previewable or self.media_kind):
            raise ValueError(f"Directory entry {self.name!r} cannot be previewable")
        if self.previewable != (self.media_kind is not None):
            raise ValueError(f"Entry {self.name!r}: previewable requires a media kind")

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass
class ListingResult:
    """A freshly built listing of one directory."""

    resolved_path: str
    parent_path: str
    entries: list[DirectoryEntry] = field(default_factory=list)


@dataclass
class UploadedFile:
    """Outcome of storing a single uploaded file."""

    name: str  # as declared by the client
    saved_as: str
    size: int = 0
    ok: bool = True
    error: str | None = None


@dataclass
class UploadResult:
    """Per-file outcomes of one upload request."""

    upload_dir: str
    files: list[UploadedFile] = field(default_factory=list)

    @property
    def files_accepted(self) -> int:
        return sum(1 for f in self.files if f.ok)

    @property
    def files_failed(self) -> int:
        return sum(1 for f in self.files if not f.ok)
