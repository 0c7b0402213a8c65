"""Pytest fixtures for the md-marshal test suite."""

import pytest
from loguru import logger

from md_marshal.config import Config


# ============================================================================
# CONFIG FIXTURES
# ============================================================================


@pytest.fixture
def restore_config():
    """
    Restore Config class attributes changed by a test.

    Yields:
        The Config class, free to be modified
    """
    saved = {
        "MASK_CHAR": Config.MASK_CHAR,
        "VISIBLE_SUFFIX_LENGTH": Config.VISIBLE_SUFFIX_LENGTH,
        "INDENT_UNIT": Config.INDENT_UNIT,
    }
    try:
        yield Config
    finally:
        for key, value in saved.items():
            setattr(Config, key, value)


# ============================================================================
# LOGGING FIXTURES
# ============================================================================


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(str(msg)), format="{message}", level="DEBUG"
    )
    try:
        yield messages
    finally:
        logger.remove(handler_id)
