"""Logging configuration for the renderer."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", name: str = "fever_ray") -> logging.Logger:
    """Set up console logging for the package.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        name: Logger name to configure. Defaults to the package logger so
            every module logger inherits the handler.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid stacking handlers when called more than once
    for handler in list(logger.handlers):
        if getattr(handler, "_fever_ray_handler", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._fever_ray_handler = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)

    return logger
