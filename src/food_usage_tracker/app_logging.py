"""Logging configuration helpers."""

import logging

ROOT_LOGGER = "food_usage_tracker"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure package logging with a single stream handler.

    Repeated calls only adjust the level, so app factories and tests can call
    this freely.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
