# Single-slot shared text store.
# Created: 2026-10-12

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from pocketdrop.errors import InvalidRequestError


@dataclass(frozen=True)
class TextSnapshot:
    """An immutable view of the store at one point in time."""

    text: str = ""
    version: int = 0
    updated_at: float | None = None


class SharedTextStore:
    """Holds one string that every client can read and replace.

    Writers take a lock and swap in a new immutable snapshot; readers just read
    the current snapshot reference, so they never see a half-applied write and
    never block each other. Last write wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = TextSnapshot()

    def get(self) -> str:
        return self._snapshot.text

    def snapshot(self) -> TextSnapshot:
        return self._snapshot

    def set(self, text: str) -> str:
        """Replace the stored text. An empty string clears it.

        Raises:
            InvalidRequestError: *text* is not a string.
        """
        if not isinstance(text, str):
            raise InvalidRequestError(f"Text must be a string, got {type(text).__name__}")
        with self._lock:
            self._snapshot = TextSnapshot(
                text=text,
                version=self._snapshot.version + 1,
                updated_at=time.time(),
            )
        return text
