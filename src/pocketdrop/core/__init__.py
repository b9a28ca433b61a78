# Core browsing, transfer and shared-text services.
# Created: 2026-10-12
#
# Nothing in here knows about HTTP; the api package adapts these to FastAPI.

from pocketdrop.core.listing import DirectoryLister
from pocketdrop.core.models import (
    DirectoryEntry,
    EntryKind,
    ListingResult,
    MediaKind,
    UploadedFile,
    UploadResult,
)
from pocketdrop.core.paths import resolve
from pocketdrop.core.shared_text import SharedTextStore, TextSnapshot
from pocketdrop.core.transfer import Download, TransferService, sanitize_filename

__all__ = [
    "DirectoryEntry",
    "DirectoryLister",
    "Download",
    "EntryKind",
    "ListingResult",
    "MediaKind",
    "SharedTextStore",
    "TextSnapshot",
    "TransferService",
    "UploadResult",
    "UploadedFile",
    "resolve",
    "sanitize_filename",
]
