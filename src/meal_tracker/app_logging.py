"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the meal_tracker logger once; later calls only adjust the level."""
    logger = logging.getLogger("meal_tracker")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
