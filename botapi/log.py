"""Logging helpers: a single-line JSON formatter and the debug log buffer.

The library logs through ``logging.getLogger("botapi.<module>")`` and never
installs handlers on its own.  Hosts that want structured output call
:func:`configure_logging` once at start-up.
"""

import io
import json
import logging
import os
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Callable, Optional

LOGGER_NAME = "botapi"

_MAX_BYTES: int = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT: int = 5


class JsonFormatter(logging.Formatter):
    """Format every log record as a single-line JSON object.

    Standard fields (timestamp, level, logger, message, module, func_name)
    are always present.  Any *extra* key-value pairs passed via the ``extra``
    parameter of a logging call are merged into the JSON object, so a call
    such as::

        logger.error("getUpdates failed", extra={"api_endpoint": "getUpdates", "error": "timeout"})

    produces::

        {"timestamp": "…", "level": "ERROR", …, "api_endpoint": "getUpdates", "error": "timeout"}
    """

    # Keys that belong to the standard LogRecord; everything else is extra.
    _BUILTIN_ATTRS: frozenset = frozenset(vars(logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    ))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }

        for key, value in record.__dict__.items():
            if key not in self._BUILTIN_ATTRS and key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Attach JSON handlers to the ``botapi`` logger and return it.

    A console handler is always installed; a rotating file handler is added
    when *log_file* is given.  Calling this more than once does not add
    duplicate handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class DebugLog:
    """Append-only, lock-guarded text buffer filled while debug mode is on.

    Every line is also forwarded to the optional *sink* callback, which lets
    a host route debug output into its own logging pipeline.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None) -> None:
        self._buffer = io.StringIO()
        self._lock = threading.Lock()
        self._sink = sink

    def write(self, message: str) -> None:
        stamp = datetime.now(tz=timezone.utc).strftime("%Y/%m/%d %H:%M:%S")
        line = f"Debug: {stamp} {message.rstrip()}\n"
        with self._lock:
            self._buffer.write(line)
        if self._sink is not None:
            self._sink(line)

    def getvalue(self) -> str:
        with self._lock:
            return self._buffer.getvalue()

    def dump(self, path: str) -> None:
        """Write the buffer contents to *path*."""
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(self.getvalue())

    def clear(self) -> None:
        with self._lock:
            self._buffer = io.StringIO()
