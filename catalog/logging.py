"""
Logging for the catalog service.

All modules log through the root logger returned by setup_logging():

- console output in a readable, per-line format tagged with the request's
  correlation id;
- ERROR and above additionally written as one JSON object per line to
  LOG_FILE_PATH, enriched with the request's log context.

Request-scoped fields (endpoint, method, status_code) live in a context
variable filled by LoggingContextMiddleware.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from catalog.constants import MAX_LOG_SIZE_BYTES
from catalog.settings import app_settings

log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_TRUNCATED_SUFFIX = "... [TRUNCATED]"

# Attributes every LogRecord carries; anything else came in via `extra`
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "correlation_id", "taskName"}

# Fields kept when everything else has to go to respect MAX_LOG_SIZE_BYTES
_CORE_FIELDS = (
    "timestamp",
    "level",
    "logger",
    "message",
    "module",
    "function",
    "line",
    "environment",
    "request_id",
)


def get_correlation_id() -> str:
    """Correlation id of the request being handled, or ""."""
    from catalog.middlewares.correlation_id import get_correlation_id as _current

    return _current()


def set_log_context(**fields: Any) -> None:
    """
    Add fields to the current request's log context.

    Example:
        >>> set_log_context(endpoint="/catalog/authors", method="GET")
    """
    log_context.set({**log_context.get(), **fields})


def get_log_context() -> dict[str, Any]:
    return log_context.get()


def clear_log_context() -> None:
    log_context.set({})


class StructuredJSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Carries timestamp, level, logger, message and source location, the
    correlation id as `request_id`, the log context, the environment, any
    `extra` fields and the formatted exception. Oversized messages are
    truncated so a line stays under MAX_LOG_SIZE_BYTES.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": app_settings.ENVIRONMENT,
        }

        request_id = get_correlation_id()
        if request_id:
            entry["request_id"] = request_id

        entry.update(get_log_context())
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        message = entry["message"]
        line = self._shorten_message(entry)
        if len(line) <= MAX_LOG_SIZE_BYTES:
            return line

        # Context, extra or exception fields alone exceed the limit
        core = {key: entry[key] for key in _CORE_FIELDS if key in entry}
        core["message"] = message
        core["dropped_fields"] = sorted(set(entry) - set(core))
        return self._shorten_message(core)

    @staticmethod
    def _shorten_message(entry: dict[str, Any]) -> str:
        """Cut the message so the serialized entry fits, if it can."""
        line = json.dumps(entry, default=str)
        if len(line) <= MAX_LOG_SIZE_BYTES:
            return line

        overflow = len(line) - MAX_LOG_SIZE_BYTES + len(_TRUNCATED_SUFFIX)
        message = entry["message"]
        entry["message"] = message[: max(len(message) - overflow, 0)] + _TRUNCATED_SUFFIX
        return json.dumps(entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Console formatter.

    INFO lines show only the message; every other level also shows where
    the record was emitted.
    """

    SHORT_FMT = "%(asctime)s - [%(correlation_id)s] %(levelname)s: %(message)s"
    LONG_FMT = (
        "%(asctime)s - [%(correlation_id)s] %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._short = logging.Formatter(self.SHORT_FMT, datefmt=_DATE_FORMAT)
        self._long = logging.Formatter(self.LONG_FMT, datefmt=_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = get_correlation_id() or "-"
        formatter = self._short if record.levelno == logging.INFO else self._long
        return formatter.format(record)


def _error_file_handler(path: str) -> logging.Handler:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    handler = logging.FileHandler(path)
    handler.setLevel(logging.ERROR)
    handler.setFormatter(StructuredJSONFormatter())
    return handler


def setup_logging() -> logging.Logger:
    """
    (Re)configure the root logger.

    Existing handlers are replaced. If the error log file cannot be opened
    the service keeps logging to the console only.

    Returns:
        The root logger.
    """
    root = logging.getLogger()
    root.setLevel(app_settings.LOG_LEVEL.upper())
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(HumanReadableFormatter())
    root.addHandler(console)

    try:
        root.addHandler(_error_file_handler(app_settings.LOG_FILE_PATH))
    except OSError as ex:
        root.warning(f"Error log file disabled: {ex}")

    # Keep test output clean
    if os.path.basename(sys.argv[0]) == "pytest":
        logging.disable(logging.ERROR)

    return root


logger = setup_logging()
