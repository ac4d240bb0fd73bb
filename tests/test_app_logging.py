"""Tests for logging configuration."""

import logging

from food_usage_tracker.app_logging import ROOT_LOGGER, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_accepts_level_names() -> None:
    logger = logging.getLogger(ROOT_LOGGER)
    previous = logger.level
    try:
        configure_logging("debug")
        assert logger.level == logging.DEBUG

        configure_logging(logging.WARNING)
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)
