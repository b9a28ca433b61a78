# Directory listing with preview classification and stable ordering.
# Created: 2026-10-12

from __future__ import annotations

import logging
import os
from pathlib import Path

from pocketdrop.core.models import DirectoryEntry, EntryKind, ListingResult, MediaKind
from pocketdrop.core.paths import parent_of
from pocketdrop.errors import PathAccessError, PathNotADirectoryError, PathNotFoundError

logger = logging.getLogger(__name__)

# Windows trash and volume metadata folders
HIDDEN_NAMES = frozenset({"$RECYCLE.BIN", "System Volume Information"})

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg"})
VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "ogg", "mov"})


def classify_media(name: str) -> MediaKind | None:
    """Media kind from the file extension alone (no content sniffing)."""
    _, dot, ext = name.rpartition(".")
    if not dot:
        return None
    ext = ext.lower()
    if ext in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return None


def is_hidden(name: str) -> bool:
    return name.startswith(".") or name in HIDDEN_NAMES


def sort_key(entry: DirectoryEntry) -> tuple[bool, str]:
    """Directories first, then case-insensitive name."""
    return (not entry.is_dir, entry.name.lower())


class DirectoryLister:
    """Lists the immediate children of a directory.

    Stateless; every call reads the filesystem again so repeated listings of an
    unchanged directory are identical.
    """

    def list_directory(self, path: str | Path) -> ListingResult:
        """List *path* (already resolved).

        Raises:
            PathNotFoundError: *path* does not exist.
            PathNotADirectoryError: *path* is not a directory.
            PathAccessError: *path* cannot be read.
        """
        path_str = str(path)
        parent = parent_of(path_str)

        entries: list[DirectoryEntry] = []
        try:
            with os.scandir(path_str) as it:
                for dirent in it:
                    if is_hidden(dirent.name):
                        continue
                    entries.append(self._make_entry(dirent))
        except FileNotFoundError:
            raise PathNotFoundError(
                f"Path does not exist: {path_str}", path=path_str, parent_path=parent
            ) from None
        except NotADirectoryError:
            raise PathNotADirectoryError(
                f"Not a directory: {path_str}", path=path_str, parent_path=parent
            ) from None
        except PermissionError:
            raise PathAccessError(
                f"Permission denied: {path_str}", path=path_str, parent_path=parent
            ) from None
        except OSError as e:
            # e.g. EIO on a flaky mount
            logger.warning(f"Cannot list {path_str}: {e}")
            raise PathAccessError(
                f"Cannot read directory: {path_str}", path=path_str, parent_path=parent
            ) from e

        entries.sort(key=sort_key)
        return ListingResult(resolved_path=path_str, parent_path=parent, entries=entries)

    @staticmethod
    def _make_entry(dirent: os.DirEntry) -> DirectoryEntry:
        try:
            is_dir = dirent.is_dir()
        except OSError:
            is_dir = False

        size: int | None = None
        modified: float | None = None
        try:
            st = dirent.stat()
            modified = st.st_mtime
            if not is_dir:
                size = st.st_size
        except OSError:
            # Dangling symlink or vanished entry
            pass

        if is_dir:
            return DirectoryEntry(
                name=dirent.name,
                kind=EntryKind.DIRECTORY,
                absolute_path=dirent.path,
                modified=modified,
            )

        media_kind = classify_media(dirent.name)
        return DirectoryEntry(
            name=dirent.name,
            kind=EntryKind.FILE,
            absolute_path=dirent.path,
            previewable=media_kind is not None,
            media_kind=media_kind,
            size=size,
            modified=modified,
        )
