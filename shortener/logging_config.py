"""
Application logging configuration.

This module provides unified logging configuration for the URL shortener.
It sets up structured logging that captures detailed error information
for debugging while returning safe, user-friendly messages to clients.

Repeated messages are throttled by DuplicateMessageFilter: the same
(level, message) pair is emitted at most once per time window, so a
failing database does not flood the log with identical errors.
"""
import logging
import os
import sys
import threading

from cachetools import TTLCache

from shortener.config import settings

LOGGER_NAME = "shortener"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SENSITIVE_FIELDS = ("password",)


class DuplicateMessageFilter(logging.Filter):
    """Drop records whose (level, message) was already seen within ``window_seconds``."""

    def __init__(self, window_seconds: int = 60, max_entries: int = 1000):
        super().__init__()
        # TTLCache會自動淘汰超過ttl秒的項目，maxsize限制追蹤的訊息數量
        self._seen: TTLCache = TTLCache(maxsize=max_entries, ttl=window_seconds)
        # TTLCache不是thread-safe，FastAPI的sync endpoint會在threadpool中同時寫log
        self._lock = threading.Lock()

    def filter(self, record: logging.LogRecord) -> bool:
        key = (record.levelno, record.getMessage())
        with self._lock:
            if key in self._seen:
                return False
            self._seen[key] = True
        return True


class SensitiveDataFilter(logging.Filter):
    """Mask sensitive values passed through ``extra=``."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in SENSITIVE_FIELDS:
            if hasattr(record, field):
                setattr(record, field, "***")
        return True


def _build_handler(
    handler: logging.Handler, level: int, filters: list[logging.Filter]
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for log_filter in filters:
        handler.addFilter(log_filter)
    return handler


def _file_handler(path: str) -> logging.FileHandler:
    """Open a log file, creating its directory first."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return logging.FileHandler(path)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    error_log_file: str | None = None,
    dedup: bool | None = None,
) -> logging.Logger:
    """
    Configure and return the application logger.

    The logger outputs to stdout with a structured format including:
    - Timestamp
    - Logger name
    - Log level
    - Message

    Optionally it also writes a combined log file and an error-only log
    file. Arguments left as None fall back to the LOG_* settings.

    Returns:
        logging.Logger: Configured logger instance
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    log_file = log_file if log_file is not None else settings.LOG_FILE
    error_log_file = error_log_file if error_log_file is not None else settings.LOG_ERROR_FILE
    dedup = settings.LOG_DEDUP_ENABLED if dedup is None else dedup

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    def handler_filters() -> list[logging.Filter]:
        # 每個handler各自一份DuplicateMessageFilter，否則第一個handler記錄後其他handler會被擋掉
        filters: list[logging.Filter] = [SensitiveDataFilter()]
        if dedup:
            filters.append(
                DuplicateMessageFilter(
                    window_seconds=settings.LOG_DEDUP_WINDOW_SECONDS,
                    max_entries=settings.LOG_DEDUP_MAX_ENTRIES,
                )
            )
        return filters

    # Prevent duplicate handlers if called multiple times
    if not logger.handlers:
        # Filters sit on the handlers so records from child loggers
        # ("shortener.registry", ...) are masked and throttled too.
        logger.addHandler(
            _build_handler(logging.StreamHandler(sys.stdout), numeric_level, handler_filters())
        )

        if log_file:
            logger.addHandler(
                _build_handler(_file_handler(log_file), numeric_level, handler_filters())
            )

        if error_log_file:
            logger.addHandler(
                _build_handler(_file_handler(error_log_file), logging.ERROR, handler_filters())
            )

    return logger
