"""Structured JSON logging shared by every voicescribe module."""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

_handler: logging.Handler | None = None


def setup_logging() -> logging.Logger:
    """
    Returns the root logger, installing the JSON handler on first use.

    The root and Uvicorn loggers share one stdout handler whose records carry
    timestamp, level, logger name, message and the ddtrace trace and span
    ids. The level is read from SCRIBE_LOG_LEVEL (default INFO).

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _handler
    root_logger = logging.getLogger()
    if _handler is not None:
        return root_logger

    level = os.getenv("SCRIBE_LOG_LEVEL", "INFO").upper()
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.handlers = [_handler]

    for logger_name in UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [_handler]
        u_logger.propagate = False

    return root_logger
