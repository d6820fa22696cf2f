# qa_service/logging_config.py

"""
Logging setup for the Q&A service.

Call ``configure_logging()`` once at process startup (``create_app`` does
this); everywhere else just use ``get_logger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

DEFAULT_LOGGER_NAME = "qa_service"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _parse_level(value: Union[int, str, None]) -> Optional[int]:
    """
    Map a string log level (e.g. 'DEBUG', 'info') to a logging constant.
    Returns None for empty or unrecognized values.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else None


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    force: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler to the service logger and set its level.

    ``level`` defaults to the ``log_level`` setting. Repeated calls are
    no-ops unless ``force`` is True.
    """
    global _configured

    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    if _configured and not force:
        return logger

    if level is None:
        from .config import get_settings

        level = get_settings().log_level

    resolved = _parse_level(level) or logging.INFO

    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(resolved)
    _configured = True
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger under the ``qa_service`` hierarchy.

    Module names that already start with ``qa_service`` are used as-is.
    """
    if not name:
        return logging.getLogger(DEFAULT_LOGGER_NAME)
    if name == DEFAULT_LOGGER_NAME or name.startswith(DEFAULT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{DEFAULT_LOGGER_NAME}.{name}")


__all__ = ["DEFAULT_LOGGER_NAME", "configure_logging", "get_logger"]
