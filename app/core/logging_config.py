"""
Logging setup for LegalEase File.

Two output shapes on the root logger:
- JSON lines (`LOG_JSON=true`, and always for `LOG_FILE`), with every
  `extra=` field copied into the object.
- A compact coloured line for a developer terminal, suffixed with the
  request id when the record carries one.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from app.core.config import Settings

# Attributes every LogRecord has; anything else arrived through `extra=`
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


def record_extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_FIELDS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(record_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, "")
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = (
            f"{self.DIM}{clock}{self.RESET} "
            f"{color}{record.levelname:<8}{self.RESET} "
            f"{self.DIM}{record.name}{self.RESET} {record.getMessage()}"
        )
        request_id = getattr(record, "request_id", None)
        if request_id:
            line += f" {self.DIM}[{request_id}]{self.RESET}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(settings: Settings) -> None:
    """Replace the root logger's handlers according to settings."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(JSONFormatter() if settings.log_json else ConsoleFormatter())
    root.addHandler(console)

    if settings.log_file:
        to_file = logging.FileHandler(settings.log_file)
        to_file.setFormatter(JSONFormatter())
        root.addHandler(to_file)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
