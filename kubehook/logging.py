# kubehook/logging.py
"""
Structured logging for kubehook.

Every line is a JSON object:
- timestamp: ISO 8601
- level: DEBUG/INFO/WARNING/ERROR/CRITICAL
- logger: Module name
- message: Log event name (snake_case, e.g. "webhook_delivery_failed")
- context fields bound to the logger (handler, kind, name, ...)
- **kwargs passed at the call site

Usage:
    from kubehook.logging import get_handler_logger
    logger = get_handler_logger("webhook")
    event_log = logger.bind(kind="Deployment", name="web")
    event_log.info("webhook_delivery_complete", status_code=200)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter for structured records."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "structured_data"):
            log_data.update(record.structured_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """
    Python logger wrapper that attaches structured fields to each record.

    Fields bound with bind() are added to every record the returned
    logger emits; call-site kwargs override bound fields.
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self.context: Dict[str, Any] = dict(context or {})

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Return a logger with extra context fields (self is unchanged)."""
        return StructuredLogger(self._logger.name, {**self.context, **fields})

    def _log(self, level: int, message: str, **kwargs):
        extra = {"structured_data": {**self.context, **kwargs}}
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)


_configured = False


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: Optional[str] = None,
    force: bool = False,
):
    """
    Configure root logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: JSON lines on stdout (True) or plain text (False)
        log_file: Optional path that also receives JSON lines
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return
    _configured = True

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if json_output:
        console_handler.setFormatter(StructuredLogFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredLogFormatter())
        root_logger.addHandler(file_handler)

    # Request lines from the HTTP stack would duplicate delivery logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return StructuredLogger(name)


def get_handler_logger(handler_name: str) -> StructuredLogger:
    """Logger for a notification handler; records carry handler=<name>."""
    return get_logger(f"kubehook.handlers.{handler_name}").bind(handler=handler_name)
