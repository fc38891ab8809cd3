"""Tests for trendpost/log.py."""

import logging
from datetime import date
from unittest.mock import MagicMock, patch

from trendpost import log as log_module
from trendpost.log import _file_handler, get_logger, log_path, set_verbose


def _console(logger):
    return next(h for h in logger.handlers if h.get_name() == "console")


class TestLogging:
    def test_log_path_is_per_day(self):
        assert log_path(date(2026, 10, 18)).name == "trendpost_20261018.log"

    def test_logger_is_shared(self):
        assert get_logger() is get_logger()
        assert get_logger().name == "trendpost"

    def test_set_verbose_toggles_console_only(self):
        logger = get_logger()
        try:
            set_verbose(True)
            assert _console(logger).level == logging.DEBUG
        finally:
            set_verbose(False)
        assert _console(logger).level == logging.INFO
        for handler in logger.handlers:
            if handler.get_name() == "file":
                assert handler.level == logging.DEBUG

    def test_client_libraries_are_quiet(self):
        get_logger()
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_unwritable_log_dir_gives_no_file_handler(self):
        logs_dir = MagicMock()
        logs_dir.mkdir.side_effect = PermissionError("read-only")
        with patch.object(log_module, "LOGS_DIR", logs_dir):
            assert _file_handler() is None
