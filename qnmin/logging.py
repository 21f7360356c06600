"""Logging utilities for qnmin.

Every solver module obtains its logger through :func:`get_logger`, so the
whole package can be silenced or traced from one place. Loggers do not
propagate to the root logger and write to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_DEFAULT_LEVEL = logging.WARNING
_ROOT_NAME = "qnmin"

_loggers: dict[str, logging.Logger] = {}
_format = DEFAULT_FORMAT
_stream: Optional[IO[str]] = None


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Args:
        name: Logger name, typically ``__name__``. Names outside the package
            namespace are nested under ``qnmin.``. ``None`` returns the
            package logger.

    Returns:
        Cached logger instance.

    Example:
        >>> from qnmin.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("bracket expanded to [%g, %g]", 0.0, 2.0)
    """
    if name is None:
        name = _ROOT_NAME
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"

    logger = _loggers.get(name)
    if logger is not None:
        return logger

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every qnmin logger, present and future.

    Args:
        level: ``logging`` level constant or its name (``"DEBUG"``, ...).
            Unknown names fall back to WARNING.
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Replace the handlers of all qnmin loggers.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format, :data:`DEFAULT_FORMAT` when None.
        stream: Output stream, stderr when None.

    Example:
        >>> import logging
        >>> from qnmin.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG)
    """
    global _DEFAULT_LEVEL, _format, _stream
    _DEFAULT_LEVEL = _resolve_level(level)
    _format = format_string if format_string is not None else DEFAULT_FORMAT
    _stream = stream

    for logger in _loggers.values():
        logger.setLevel(_DEFAULT_LEVEL)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))


__all__ = ["DEFAULT_FORMAT", "configure_logging", "get_logger", "set_log_level"]
