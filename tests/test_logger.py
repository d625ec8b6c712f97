from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from src.utils.config import settings
from src.utils.logger import resolve_level, setup_logger


class TestLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        log_file = str(Path(self.tmp.name) / "app.log")
        patcher = mock.patch.object(settings, "log_file", log_file)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _logger(self, level_name: str) -> logging.Logger:
        with mock.patch.object(settings, "log_level", level_name):
            logger = setup_logger("fayes_diary.test")
        for handler in logger.handlers:
            self.addCleanup(handler.close)
        return logger

    def test_resolve_level(self) -> None:
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" WARNING "), logging.WARNING)
        self.assertIsNone(resolve_level("verbose"))
        self.assertIsNone(resolve_level(""))

    def test_console_follows_configured_level(self) -> None:
        logger = self._logger("DEBUG")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual([h.level for h in logger.handlers], [logging.DEBUG, logging.DEBUG])

    def test_unknown_level_falls_back_to_info(self) -> None:
        logger = self._logger("verbose")
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual([h.level for h in logger.handlers], [logging.INFO, logging.INFO])


if __name__ == "__main__":
    unittest.main()
