"""Tests for logging configuration."""

import logging

import pytest

from review_dashboard.config import Settings
from review_dashboard.utils import logging as log_config


@pytest.fixture(autouse=True)
def restore_level():
    yield
    log_config.setup_logging()


class TestResolveLevel:
    def test_defaults_to_settings_level(self, monkeypatch):
        monkeypatch.setattr(log_config, "settings", Settings(log_level="WARNING"))
        assert log_config.resolve_level() == logging.WARNING

    def test_verbose_wins(self, monkeypatch):
        monkeypatch.setattr(log_config, "settings", Settings(log_level="ERROR"))
        assert log_config.resolve_level(verbose=True) == logging.DEBUG

    def test_verbose_setting(self, monkeypatch):
        monkeypatch.setattr(log_config, "settings", Settings(verbose=True))
        assert log_config.resolve_level() == logging.DEBUG

    def test_explicit_name_is_case_insensitive(self):
        assert log_config.resolve_level(level_name="error") == logging.ERROR

    def test_unknown_name_falls_back_to_info(self):
        assert log_config.resolve_level(level_name="chatty") == logging.INFO


class TestSetupLogging:
    def test_handler_added_once(self):
        log_config.setup_logging()
        logger = log_config.setup_logging(verbose=True)

        handlers = [h for h in logger.handlers if type(h).__name__ == "RichHandler"]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
        assert handlers[0].tracebacks_show_locals is True

    def test_level_override(self):
        logger = log_config.setup_logging(level_name="WARNING")
        assert logger.name == "review_dashboard"
        assert logger.level == logging.WARNING
