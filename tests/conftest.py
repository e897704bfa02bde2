import logging

import pytest

from realtime_rag.config.constants import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset the application logger before each test"""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    yield
