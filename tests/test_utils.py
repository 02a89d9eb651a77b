import logging

import pytest

from galaxy_export.config import _env, optional_int
from galaxy_export.models.schemas import FetchStage
from galaxy_export.utils.errors import EmptyResultError, FetchError, GalaxyExportError
from galaxy_export.utils.logging_config import log_header, setup_logging


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GALAXY_EXPORT_TEST_VALUE", "2.5")
    assert _env("GALAXY_EXPORT_TEST_VALUE", 10.0, float) == 2.5
    monkeypatch.setenv("GALAXY_EXPORT_TEST_VALUE", "")
    assert _env("GALAXY_EXPORT_TEST_VALUE", 10.0, float) == 10.0


def test_non_positive_concurrency_means_unbounded():
    assert optional_int("0") is None
    assert optional_int("-3") is None
    assert optional_int("8") == 8


def test_error_messages():
    error = FetchError("a:1", FetchStage.READ, "reset")
    assert str(error) == "Failed to read from a:1: reset"
    assert not isinstance(error, GalaxyExportError)
    assert str(EmptyResultError(3)) == "No systems retrieved!"


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        setup_logging("warning")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        log_header("Collect")
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
