import unittest
import logging
from logging.handlers import RotatingFileHandler

from realtime_rag.config.logging_config import configure_logging

class TestLoggingConfig(unittest.TestCase):
    def test_configure_logging(self):
        logger = configure_logging()
        self.assertIsInstance(logger, logging.Logger)

        self.assertEqual(logger.name, "realtime_rag")
        self.assertFalse(logger.propagate)

        self.assertGreaterEqual(len(logger.handlers), 1)
        handler = logger.handlers[0]  # console handler comes first
        self.assertIsInstance(handler, logging.StreamHandler)
        formatter = handler.formatter
        self.assertEqual(formatter._fmt, "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def test_configure_logging_level_override(self):
        logger = configure_logging("debug")
        self.assertEqual(logger.level, logging.DEBUG)

    def test_configure_logging_is_idempotent(self):
        configure_logging()
        logger = configure_logging()
        stream_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)

if __name__ == "__main__":
    unittest.main()
