# Tests for core/listing.py - directory listing, filtering and ordering.
# Created: 2026-10-12

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from pocketdrop.core.listing import DirectoryLister, classify_media, is_hidden
from pocketdrop.core.models import DirectoryEntry, EntryKind, MediaKind
from pocketdrop.errors import PathAccessError, PathNotADirectoryError, PathNotFoundError


@pytest.fixture
def root(tmp_path):
    return Path(os.path.realpath(tmp_path))


@pytest.fixture
def lister():
    return DirectoryLister()


def names(listing):
    return [e.name for e in listing.entries]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------
class TestOrdering:
    def test_directories_first_then_case_insensitive(self, root, lister):
        (root / "b.txt").write_text("b")
        (root / "A").mkdir()
        (root / "a.txt").write_text("a")

        assert names(lister.list_directory(root)) == ["A", "a.txt", "b.txt"]

    def test_total_order_holds_for_mixed_entries(self, root, lister):
        for d in ("zeta", "Alpha", "mid"):
            (root / d).mkdir()
        for f in ("Zoo.md", "apple.txt", "Banana.csv", "cherry"):
            (root / f).write_text("x")

        entries = lister.list_directory(root).entries
        kinds = [e.kind for e in entries]
        first_file = kinds.index(EntryKind.FILE)
        assert all(k is EntryKind.DIRECTORY for k in kinds[:first_file])
        assert all(k is EntryKind.FILE for k in kinds[first_file:])

        dir_names = [e.name.lower() for e in entries[:first_file]]
        file_names = [e.name.lower() for e in entries[first_file:]]
        assert dir_names == sorted(dir_names)
        assert file_names == sorted(file_names)

    def test_repeated_listing_is_identical(self, root, lister):
        (root / "one").mkdir()
        (root / "two.txt").write_text("2")
        assert lister.list_directory(root) == lister.list_directory(root)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------
class TestFiltering:
    def test_dotfiles_hidden(self, root, lister):
        (root / ".hidden").mkdir()
        (root / ".env").write_text("SECRET=1")
        (root / "visible.txt").write_text("hi")
        assert names(lister.list_directory(root)) == ["visible.txt"]

    def test_system_folders_hidden(self, root, lister):
        (root / "$RECYCLE.BIN").mkdir()
        (root / "System Volume Information").mkdir()
        (root / "Photos").mkdir()
        assert names(lister.list_directory(root)) == ["Photos"]

    def test_is_hidden(self):
        assert is_hidden(".git")
        assert is_hidden("$RECYCLE.BIN")
        assert not is_hidden("readme.md")

    def test_empty_directory(self, root, lister):
        listing = lister.list_directory(root)
        assert listing.entries == []
        assert listing.resolved_path == str(root)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
class TestClassification:
    @pytest.mark.parametrize("name", ["a.jpg", "b.JPEG", "c.png", "d.gif", "e.webp", "f.svg"])
    def test_images(self, name):
        assert classify_media(name) is MediaKind.IMAGE

    @pytest.mark.parametrize("name", ["a.mp4", "b.webm", "c.ogg", "d.MOV"])
    def test_videos(self, name):
        assert classify_media(name) is MediaKind.VIDEO

    @pytest.mark.parametrize("name", ["notes.txt", "archive.tar.gz", "Makefile", "jpg"])
    def test_other(self, name):
        assert classify_media(name) is None

    def test_entries_carry_preview_flags(self, root, lister):
        (root / "photo.JPG").write_bytes(b"\xff\xd8")
        (root / "clip.mov").write_bytes(b"\x00")
        (root / "notes.txt").write_text("n")

        by_name = {e.name: e for e in lister.list_directory(root).entries}
        assert by_name["photo.JPG"].previewable is True
        assert by_name["photo.JPG"].media_kind is MediaKind.IMAGE
        assert by_name["clip.mov"].media_kind is MediaKind.VIDEO
        assert by_name["notes.txt"].previewable is False
        assert by_name["notes.txt"].media_kind is None

    def test_directory_with_image_extension_not_previewable(self, root, lister):
        (root / "album.png").mkdir()
        entry = lister.list_directory(root).entries[0]
        assert entry.kind is EntryKind.DIRECTORY
        assert entry.previewable is False
        assert entry.media_kind is None

    def test_directory_entry_rejects_preview(self):
        with pytest.raises(ValueError):
            DirectoryEntry(
                name="x",
                kind=EntryKind.DIRECTORY,
                absolute_path="/x",
                previewable=True,
                media_kind=MediaKind.IMAGE,
            )

    def test_entry_metadata(self, root, lister):
        (root / "data.bin").write_bytes(b"x" * 42)
        (root / "sub").mkdir()
        by_name = {e.name: e for e in lister.list_directory(root).entries}
        assert by_name["data.bin"].size == 42
        assert by_name["data.bin"].absolute_path == str(root / "data.bin")
        assert by_name["sub"].size is None
        assert by_name["sub"].modified is not None

    def test_dangling_symlink_listed_as_file(self, root, lister):
        (root / "broken").symlink_to(root / "missing-target")
        entry = lister.list_directory(root).entries[0]
        assert entry.kind is EntryKind.FILE
        assert entry.size is None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class TestErrors:
    def test_missing_directory(self, root, lister):
        with pytest.raises(PathNotFoundError) as exc_info:
            lister.list_directory(root / "gone")
        assert exc_info.value.path == str(root / "gone")
        assert exc_info.value.parent_path == str(root)

    def test_file_is_not_a_directory(self, root, lister):
        (root / "file.txt").write_text("x")
        with pytest.raises(PathNotADirectoryError) as exc_info:
            lister.list_directory(root / "file.txt")
        assert exc_info.value.parent_path == str(root)

    def test_permission_denied(self, root, lister):
        with patch("pocketdrop.core.listing.os.scandir", side_effect=PermissionError("no")):
            with pytest.raises(PathAccessError) as exc_info:
                lister.list_directory(root)
        assert exc_info.value.path == str(root)
        assert exc_info.value.parent_path == str(root.parent)

    def test_parent_path_not_checked_for_existence(self, root, lister):
        listing = lister.list_directory(root)
        assert listing.parent_path == str(root.parent)

    def test_filesystem_root_is_its_own_parent(self, lister):
        listing = lister.list_directory("/")
        assert listing.parent_path == "/"
