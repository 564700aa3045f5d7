"""
Package logger setup.

One handler on the `dashboard_access` logger. Each line carries the bound
request context as key=value pairs; unset fields are left out, so a cache
line shows its resource key and a request line its method and path.
"""

from __future__ import annotations

import logging

from dashboard_access.log.context import ContextFilter

_LOGGER_NAME = "dashboard_access"
_HANDLER_FLAG = "_dashboard_access_log_handler"

_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-5s %(name)s - [%(context)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rendering order of the context block.
_CONTEXT_KEYS: tuple[str, ...] = (
    "event",
    "session_id",
    "request_id",
    "method",
    "path",
    "resource_key",
    "error_type",
)


class ContextFormatter(logging.Formatter):
    """Formatter that renders only the context fields that are set."""

    def format(self, record: logging.LogRecord) -> str:
        pairs = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                pairs.append(f"{key}={value}")
        record.context = " ".join(pairs)
        return super().format(record)


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(str(level).strip().upper(), logging.INFO)


def _find_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_FLAG, False):
            return handler
    return None


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Configure the package logger. Safe to call repeatedly: the handler is
    installed once and only its level changes afterwards.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    parsed_level = _parse_level(level)
    logger.setLevel(parsed_level)
    logger.propagate = False

    handler = _find_handler(logger)
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(ContextFormatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
        handler.addFilter(ContextFilter())
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)
    handler.setLevel(parsed_level)
    return logger
