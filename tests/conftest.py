"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['SLIDEDEDUP_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Undecodable frames are exercised on purpose; their warnings are noise here
    for logger_name in ['slidededup.dedup.hash', 'slidededup.config']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
