import logging

import pytest


@pytest.fixture
def id3_logger():
    """Pin the package logger at WARNING for one test and restore it afterwards."""
    logger = logging.getLogger("id3py")
    previous = logger.level
    logger.setLevel(logging.WARNING)
    yield logger
    logger.setLevel(previous)
