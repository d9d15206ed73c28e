"""
Structured JSON logging for exports changes.

Committed writes, rejected candidates and daemon reloads are logged with
the exports file and block identifier attached, so every JSON line can be
traced back to a change of the exports file.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from .exceptions import ExportStoreError

ROOT_LOGGER = "nfs_export_blocks"

# Record attributes copied into the JSON object when set
CONTEXT_FIELDS = ("exports_file", "identifier", "operation", "returncode", "diagnostics")


class ExportsJsonFormatter(logging.Formatter):
    """
    Render log records as single-line JSON objects.

    Fields:
    - timestamp: ISO 8601 format in UTC
    - level, logger, message
    - exports_file, identifier, operation, returncode, diagnostics when present
    - error: type and details of an ExportStoreError attached via exc_info
    - exception: formatted traceback when exc_info is set
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_obj[name] = value

        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, ExportStoreError):
                log_obj["error"] = {"type": type(exc).__name__, **exc.details}
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def configure_exports_logging(
    level: int = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Send all nfs_export_blocks logs to a stream as JSON lines.

    Args:
        level: Logging level (default: INFO)
        stream: Destination stream (default: stderr)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ExportsJsonFormatter())

    logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_exports_logger(name: str) -> logging.Logger:
    """Logger named 'nfs_export_blocks.{name}'."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class ExportsLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds export context to all log messages.

    Used to attach the target exports file and block identifier.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Add extra context to log record."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs
