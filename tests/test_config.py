# Tests for config.py - settings layers.
# Created: 2026-10-12

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from pocketdrop.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("PORT", "HOST", "BROWSE_ROOT", "UPLOAD_DIR", "SHOW_QR", "CHUNK_SIZE"):
        monkeypatch.delenv(f"POCKETDROP_{key}", raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    with patch("pocketdrop.config.get_config_path", return_value=path):
        yield path


class TestDefaults:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = Settings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.browse_root == Path.home()
        assert settings.upload_dir == Path.home() / "Downloads" / "PhoneDrop"
        assert settings.static_dir is None
        assert settings.show_qr is True

    def test_tilde_paths_expanded(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = Settings(upload_dir="~/inbox", browse_root="~")
        assert settings.upload_dir == tmp_path / "inbox"
        assert settings.browse_root == tmp_path

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(chunk_size=0)


class TestLoad:
    def test_no_file(self, config_file):
        assert Settings.load().port == 3000

    def test_file_values(self, config_file):
        config_file.write_text(json.dumps({"port": 9000, "show_qr": False}))
        settings = Settings.load()
        assert settings.port == 9000
        assert settings.show_qr is False

    def test_env_beats_file(self, config_file, monkeypatch):
        config_file.write_text(json.dumps({"port": 9000}))
        monkeypatch.setenv("POCKETDROP_PORT", "7000")
        assert Settings.load().port == 7000

    def test_env_only(self, config_file, monkeypatch):
        monkeypatch.setenv("POCKETDROP_UPLOAD_DIR", "/tmp/drop-here")
        assert Settings.load().upload_dir == Path("/tmp/drop-here")

    def test_broken_file_ignored(self, config_file):
        config_file.write_text("{oops")
        assert Settings.load().port == 3000

    def test_non_object_file_ignored(self, config_file):
        config_file.write_text("[1, 2]")
        assert Settings.load().port == 3000
