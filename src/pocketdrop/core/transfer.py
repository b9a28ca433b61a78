"""Streaming downloads and atomic uploads.

Created: 2026-10-12

Downloads stream straight from an open file handle in fixed-size chunks.
Uploads always land in one upload directory: bytes are written to a hidden
temporary file next to the destination, fsynced, then renamed over the final
name with ``os.replace``. A same-named file is overwritten (last write wins),
and a reader opening the final name sees either the old or the new file,
never a partial one.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import os
import re
import stat
import tempfile
from collections.abc import AsyncIterable, AsyncIterator, Sequence
from contextlib import asynccontextmanager, suppress
from pathlib import Path
from typing import Any

import aiofiles

from pocketdrop.core.models import UploadedFile, UploadResult
from pocketdrop.core.paths import parent_of
from pocketdrop.errors import (
    DirectoryUnavailableError,
    IOReadError,
    IOWriteError,
    InvalidRequestError,
    NoFilesProvidedError,
    PathAccessError,
    PathNotAFileError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
FALLBACK_FILENAME = "upload"
TEMP_PREFIX = ".pocketdrop-"
TEMP_SUFFIX = ".part"

_SEPARATORS = re.compile(r"[\\/]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_filename(name: str | None) -> str:
    """Reduce a client-declared file name to a bare name safe to join.

    Only the last component after any ``/`` or ``\\`` is kept, control
    characters are dropped, and names that would still point elsewhere
    (empty, ``.``, ``..``) become ``upload``.
    """
    if not name:
        return FALLBACK_FILENAME
    base = _SEPARATORS.split(name)[-1]
    base = _CONTROL_CHARS.sub("", base).strip()
    if base in ("", ".", ".."):
        return FALLBACK_FILENAME
    return base


def ensure_upload_dir(path: str | Path) -> Path:
    """Create the upload directory if needed and check it is writable.

    Raises:
        DirectoryUnavailableError: the directory cannot be created or written.
    """
    target = Path(path).expanduser()
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryUnavailableError(
            f"Cannot create upload directory {target}: {e}", path=str(target)
        ) from e
    if not os.access(target, os.W_OK | os.X_OK):
        raise DirectoryUnavailableError(
            f"Upload directory is not writable: {target}", path=str(target)
        )
    return Path(os.path.realpath(target))


def guess_media_type(name: str) -> str:
    media_type, _ = mimetypes.guess_type(name)
    return media_type or "application/octet-stream"


class Download:
    """An opened file ready to be streamed once.

    ``size`` comes from the open handle, so it always matches the bytes
    :meth:`iter_chunks` yields even if the name is replaced mid-stream.
    """

    def __init__(self, path: str, handle: Any, size: int, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.path = path
        self.name = os.path.basename(path)
        self.size = size
        self.media_type = guess_media_type(self.name)
        self.chunk_size = chunk_size
        self._handle = handle
        self._closed = False

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        """Yield the file contents chunk by chunk.

        A read failure ends the stream early; headers are already out by then,
        so the error is logged rather than raised.
        """
        sent = 0
        try:
            while True:
                try:
                    chunk = await self._handle.read(self.chunk_size)
                except OSError as e:
                    logger.error(
                        f"Read failed mid-stream for {self.path} after "
                        f"{sent}/{self.size} bytes: {e}"
                    )
                    return
                if not chunk:
                    return
                sent += len(chunk)
                yield chunk
        except (asyncio.CancelledError, GeneratorExit):
            logger.debug(f"Download of {self.path} aborted by client after {sent} bytes")
            raise
        finally:
            await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._handle.close()


class _NameLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class TransferService:
    """Downloads from anywhere readable, uploads into one fixed directory.

    Usage:
        service = TransferService(Path("~/Downloads/PhoneDrop"))
        download = await service.open_download(path)
        result = await service.receive_uploads([("a.txt", stream)])
    """

    def __init__(self, upload_dir: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.upload_dir = ensure_upload_dir(upload_dir)
        self.chunk_size = chunk_size
        self._locks: dict[str, _NameLock] = {}
        self._global_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    async def open_download(self, path: str | Path) -> Download:
        """Open *path* for streaming.

        Raises:
            PathNotFoundError: nothing exists at *path*.
            PathNotAFileError: *path* is a directory or other non-regular file.
            PathAccessError: the file cannot be opened for reading.
            IOReadError: any other failure opening the file.
            InvalidRequestError: *path* contains a NUL byte.
        """
        path_str = str(path)
        parent = parent_of(path_str)

        try:
            st = await asyncio.to_thread(os.stat, path_str)
        except PermissionError:
            raise PathAccessError(
                f"Permission denied: {path_str}", path=path_str, parent_path=parent
            ) from None
        except ValueError:
            raise InvalidRequestError(
                "Path must not contain NUL bytes", path=path_str, parent_path=parent
            ) from None
        except OSError:
            raise PathNotFoundError(
                f"File not found: {path_str}", path=path_str, parent_path=parent
            ) from None
        # Opening a FIFO would block, so check the type before open()
        if not stat.S_ISREG(st.st_mode):
            raise PathNotAFileError(
                f"Not a file: {path_str}", path=path_str, parent_path=parent
            )

        try:
            handle = await aiofiles.open(path_str, "rb")
        except FileNotFoundError:
            raise PathNotFoundError(
                f"File not found: {path_str}", path=path_str, parent_path=parent
            ) from None
        except PermissionError:
            raise PathAccessError(
                f"Permission denied: {path_str}", path=path_str, parent_path=parent
            ) from None
        except OSError as e:
            raise IOReadError(
                f"Cannot open {path_str}: {e}", path=path_str, parent_path=parent
            ) from e

        try:
            size = (await asyncio.to_thread(os.fstat, handle.fileno())).st_size
        except OSError as e:
            await handle.close()
            raise IOReadError(
                f"Cannot stat {path_str}: {e}", path=path_str, parent_path=parent
            ) from e

        logger.info(f"Download started: {path_str} ({size} bytes)")
        return Download(path_str, handle, size, chunk_size=self.chunk_size)

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def destination_for(self, file_name: str | None) -> Path:
        """Final path an upload declared as *file_name* will be stored at."""
        return self.upload_dir / sanitize_filename(file_name)

    @asynccontextmanager
    async def _name_lock(self, name: str):
        """Serialize writers of the same final name."""
        # Case-insensitive volumes (macOS, Windows) map A.txt and a.txt to one file
        key = name.casefold()
        async with self._global_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _NameLock()
            entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            async with self._global_lock:
                entry.users -= 1
                if entry.users == 0:
                    self._locks.pop(key, None)

    async def receive_upload(
        self, file_name: str | None, stream: AsyncIterable[bytes]
    ) -> UploadedFile:
        """Store one incoming file in the upload directory.

        Raises:
            IOWriteError: the file could not be written; nothing is left behind.
        """
        destination = self.destination_for(file_name)
        saved_as = destination.name
        declared = file_name or saved_as

        async with self._name_lock(saved_as):
            tmp_path: str | None = None
            committed = False
            size = 0
            try:
                fd, tmp_path = await asyncio.to_thread(
                    tempfile.mkstemp, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=self.upload_dir
                )
                os.close(fd)
                async with aiofiles.open(tmp_path, "wb") as out:
                    async for chunk in stream:
                        await out.write(chunk)
                        size += len(chunk)
                    await out.flush()
                    await asyncio.to_thread(os.fsync, out.fileno())
                # mkstemp creates 0600 files
                await asyncio.to_thread(os.chmod, tmp_path, 0o644)
                await asyncio.to_thread(os.replace, tmp_path, destination)
                committed = True
            except OSError as e:
                raise IOWriteError(
                    f"Failed to save {saved_as}: {e.strerror or e}",
                    path=str(destination),
                    parent_path=str(self.upload_dir),
                ) from e
            finally:
                if not committed and tmp_path is not None:
                    with suppress(FileNotFoundError):
                        os.unlink(tmp_path)

        logger.info(f"Upload saved: {destination} ({size} bytes)")
        return UploadedFile(name=declared, saved_as=saved_as, size=size)

    async def receive_uploads(
        self, items: Sequence[tuple[str | None, AsyncIterable[bytes]]]
    ) -> UploadResult:
        """Store every file of one request; a failure does not stop the rest.

        Raises:
            NoFilesProvidedError: *items* is empty.
        """
        if not items:
            raise NoFilesProvidedError("No files uploaded.", path=str(self.upload_dir))

        result = UploadResult(upload_dir=str(self.upload_dir))
        for file_name, stream in items:
            try:
                result.files.append(await self.receive_upload(file_name, stream))
            except IOWriteError as e:
                logger.error(e.message, exc_info=e.__cause__)
                result.files.append(
                    UploadedFile(
                        name=file_name or FALLBACK_FILENAME,
                        saved_as=sanitize_filename(file_name),
                        ok=False,
                        error=e.message,
                    )
                )
        return result
