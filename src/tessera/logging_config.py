"""Structured logger setup shared across the service."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

_level = logging.INFO


def set_log_level(level: str | int) -> None:
    """Apply a log level to every tessera logger, present and future."""
    global _level
    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else int(level)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    _level = resolved
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith("tessera") and isinstance(logger, logging.Logger):
            logger.setLevel(_level)


def get_logger(name: str) -> logging.Logger:
    """
    Configure a JSON logger once and reuse it.

    Records carry their `extra` fields as JSON keys, so call sites pass
    ticket ids and principals there instead of formatting them into the message.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(_level)
    logger.propagate = False
    return logger
