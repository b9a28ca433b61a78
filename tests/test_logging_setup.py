# Tests for logging_setup.py
# Created: 2026-10-12

import logging

import pytest
from rich.logging import RichHandler

from pocketdrop.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_installs_single_rich_handler(restore_root_logger):
    setup_logging("debug")
    setup_logging("DEBUG")
    root = restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert root.level == logging.DEBUG


def test_quiets_access_log(restore_root_logger):
    setup_logging("INFO")
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
