# Error taxonomy shared by the core and the HTTP layer.
# Created: 2026-10-12

from __future__ import annotations

from typing import Any

__all__ = [
    "PocketDropError",
    "PathNotFoundError",
    "PathAccessError",
    "PathNotAFileError",
    "PathNotADirectoryError",
    "IOReadError",
    "IOWriteError",
    "InvalidRequestError",
    "NoFilesProvidedError",
    "DirectoryUnavailableError",
]


class PocketDropError(Exception):
    """Base class for every failure the service reports to a client.

    Carries the attempted ``path`` and its ``parent_path`` (when a path was
    involved) so a client can retry or navigate up.
    """

    code = "error"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        parent_path: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.parent_path = parent_path

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "code": self.code,
            "path": self.path,
            "parentPath": self.parent_path,
        }


class PathNotFoundError(PocketDropError):
    code = "not_found"
    status_code = 404


class PathAccessError(PocketDropError):
    code = "access_denied"
    status_code = 403


class PathNotAFileError(PocketDropError):
    code = "not_a_file"
    status_code = 400


class PathNotADirectoryError(PocketDropError):
    code = "not_a_directory"
    status_code = 400


class IOReadError(PocketDropError):
    code = "io_read"
    status_code = 500


class IOWriteError(PocketDropError):
    code = "io_write"
    status_code = 500


class InvalidRequestError(PocketDropError):
    code = "validation"
    status_code = 400


class NoFilesProvidedError(PocketDropError):
    code = "no_files"
    status_code = 400


class DirectoryUnavailableError(PocketDropError):
    """The upload directory could not be created or written. Fatal at startup."""

    code = "directory_unavailable"
    status_code = 500
