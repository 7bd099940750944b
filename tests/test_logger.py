"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from rich.console import Console
from rich.logging import RichHandler

from formquill.utils import configure_logging, get_logger, set_log_level


class TestConfigureLogging:
    def test_installs_rich_handler(self):
        configure_logging("DEBUG", console=Console(file=None, force_terminal=False))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_replaces_existing_handlers(self):
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "formquill.log"
        configure_logging("WARNING", log_file=str(log_file), max_file_size=1024, backup_count=2)
        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert file_handlers[0].backupCount == 2

        get_logger("formquill.tests").warning("written to file")
        file_handlers[0].flush()
        assert "written to file" in log_file.read_text()
        file_handlers[0].close()

    def test_level_is_case_insensitive(self):
        configure_logging("error")
        assert logging.getLogger().level == logging.ERROR

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")


class TestLoggerHelpers:
    def test_set_log_level_updates_handlers(self):
        configure_logging("INFO")
        set_log_level("DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in root.handlers)

    def test_get_logger(self):
        assert get_logger("formquill.engine").name == "formquill.engine"

    @pytest.mark.parametrize("name", ["", None])
    def test_get_logger_rejects_empty_name(self, name):
        with pytest.raises(ValueError):
            get_logger(name)
