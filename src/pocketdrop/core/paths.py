# Path resolution for client-supplied paths.
# Created: 2026-10-12
#
# There is deliberately no root jail: any path the process can read may be
# browsed. Hidden and system entries are filtered by the lister instead.

from __future__ import annotations

import errno
import os
from pathlib import Path

from pocketdrop.errors import InvalidRequestError, PathAccessError, PathNotFoundError


def parent_of(path: str | Path) -> str:
    """Lexical parent of *path*; a filesystem root is its own parent."""
    return str(Path(path).parent)


def resolve(raw_path: str | None, default_root: str | Path) -> Path:
    """Turn *raw_path* into a canonical absolute path.

    Empty or missing input yields *default_root*. ``~`` is expanded and
    relative paths are taken relative to *default_root*. Symlinks are followed
    and ``.``/``..`` collapsed.

    Raises:
        PathNotFoundError: the target does not exist (or names an unknown ``~user``).
        PathAccessError: the target (or a directory on the way) is not accessible.
        InvalidRequestError: the path contains a NUL byte or is too long.
    """
    if raw_path and "\x00" in raw_path:
        raise InvalidRequestError(
            "Path must not contain NUL bytes",
            path=raw_path,
            parent_path=parent_of(raw_path),
        )

    root = Path(default_root).expanduser()
    if raw_path is None or not raw_path.strip():
        candidate = root
    else:
        try:
            candidate = Path(raw_path).expanduser()
        except RuntimeError:
            # ~user for a user that does not exist
            raise PathNotFoundError(
                f"Unknown home directory in path: {raw_path}",
                path=raw_path,
                parent_path=parent_of(raw_path),
            ) from None
        if not candidate.is_absolute():
            candidate = root / candidate

    resolved = Path(os.path.realpath(candidate))
    try:
        os.stat(resolved)
    except PermissionError:
        raise PathAccessError(
            f"Permission denied: {resolved}",
            path=str(resolved),
            parent_path=parent_of(resolved),
        ) from None
    except OSError as e:
        if e.errno == errno.ENAMETOOLONG:
            raise InvalidRequestError(
                "Path is too long",
                path=str(resolved),
                parent_path=parent_of(resolved),
            ) from None
        raise PathNotFoundError(
            f"Path does not exist: {resolved}",
            path=str(resolved),
            parent_path=parent_of(resolved),
        ) from None
    return resolved
