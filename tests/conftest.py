"""Root test configuration — per-test reset of CLI logging handlers"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop handlers the CLI bound to CliRunner's temporary stderr."""
    yield
    logger = logging.getLogger("mdfront")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
