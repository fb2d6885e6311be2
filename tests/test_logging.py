"""Tests for the shared logging setup."""

import logging
import time
import unittest

from poseidon.core.logging import LOG_DATEFMT, setup_logging

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class TestSetupLogging(unittest.TestCase):
    """setup_logging installs one UTC stdout handler shared with uvicorn."""

    def setUp(self) -> None:
        root = logging.getLogger()
        saved = [(root, list(root.handlers), root.level)]
        for name in UVICORN_LOGGERS:
            logger = logging.getLogger(name)
            saved.append((logger, list(logger.handlers), logger.level))

        def restore() -> None:
            for logger, handlers, level in saved:
                logger.handlers = handlers
                logger.setLevel(level)

        self.addCleanup(restore)

    def test_timestamps_are_utc(self) -> None:
        setup_logging("INFO")
        formatter = logging.getLogger().handlers[0].formatter
        self.assertTrue(LOG_DATEFMT.endswith("Z"))
        self.assertIs(formatter.converter, time.gmtime)
        record = logging.makeLogRecord({"created": 0.0, "msg": "x"})
        self.assertEqual(formatter.formatTime(record, LOG_DATEFMT), "1970-01-01T00:00:00Z")

    def test_repeated_setup_keeps_a_single_handler(self) -> None:
        setup_logging("info")
        setup_logging("DEBUG")
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(root.level, logging.DEBUG)
        for name in UVICORN_LOGGERS:
            self.assertEqual(logging.getLogger(name).handlers, root.handlers)
