"""Root conftest.py for conduit-client tests.

This file MUST be at the repository root for fixtures to be discovered
when running tests from any subdirectory.
"""

import pytest
from unittest.mock import MagicMock


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing.

    ``bind`` returns the same mock so component loggers record onto it.
    """
    logger = MagicMock()
    logger.info = MagicMock()
    logger.debug = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    logger.bind = MagicMock(return_value=logger)
    return logger
