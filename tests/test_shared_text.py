# Tests for core/shared_text.py - the single-slot shared text store.
# Created: 2026-10-12

import threading

import pytest

from pocketdrop.core.shared_text import SharedTextStore, TextSnapshot
from pocketdrop.errors import InvalidRequestError


class TestSharedTextStore:
    def test_starts_empty(self):
        store = SharedTextStore()
        assert store.get() == ""
        assert store.snapshot() == TextSnapshot()

    def test_last_write_wins(self):
        store = SharedTextStore()
        store.set("hello")
        store.set("world")
        assert store.get() == "world"

    def test_empty_string_clears(self):
        store = SharedTextStore()
        store.set("something")
        store.set("")
        assert store.get() == ""

    def test_set_returns_text(self):
        assert SharedTextStore().set("copied") == "copied"

    def test_version_increments(self):
        store = SharedTextStore()
        store.set("a")
        store.set("a")
        snap = store.snapshot()
        assert snap.version == 2
        assert snap.updated_at is not None

    @pytest.mark.parametrize("bad", [None, 42, ["a"], {"text": "x"}, b"bytes"])
    def test_rejects_non_strings(self, bad):
        store = SharedTextStore()
        store.set("keep me")
        with pytest.raises(InvalidRequestError):
            store.set(bad)
        assert store.get() == "keep me"
        assert store.snapshot().version == 1

    def test_concurrent_readers_see_whole_values(self):
        store = SharedTextStore()
        values = {"", "a" * 10_000, "b" * 20_000}
        seen_bad: list[str] = []
        stop = threading.Event()

        def writer(text):
            for _ in range(200):
                store.set(text)

        def reader():
            while not stop.is_set():
                if store.get() not in values:
                    seen_bad.append(store.get())

        readers = [threading.Thread(target=reader) for _ in range(3)]
        writers = [threading.Thread(target=writer, args=(v,)) for v in values if v]
        for t in readers + writers:
            t.start()
        for t in writers:
            t.join()
        stop.set()
        for t in readers:
            t.join()

        assert seen_bad == []
        assert store.get() in values
        assert store.snapshot().version == 400
