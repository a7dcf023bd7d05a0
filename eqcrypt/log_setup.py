"""
eqcrypt Logging Setup
=====================
Structured logging for hosts embedding the engine.

Engine modules log through ``structlog.get_logger(__name__)``. This module
routes those events into the standard library so a host can pick JSON output
(for log shipping) or plain text (for a desktop console).

Usage:
    from eqcrypt.log_setup import setup_logging

    setup_logging(service_name="eqemu-password-hasher")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog

from .config import EngineConfig

# Attributes every LogRecord carries; anything else came in as event context.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

_service_name = "eqcrypt"


def _event_context(record: logging.LogRecord):
    for key, value in record.__dict__.items():
        if key not in _RECORD_ATTRS and not key.startswith("_"):
            yield key, value


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    structlog keywords are added as top-level keys but never replace the
    record fields (``level``, ``message`` and the rest).
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": _service_name,
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in _event_context(record):
            entry.setdefault(key, value)

        return json.dumps(entry, default=str)


def setup_logging(
    service_name: str = "eqcrypt",
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> logging.Logger:
    """
    Configure stdlib logging and structlog for the engine.

    Args:
        service_name: Name stamped on every JSON record
        level: Logging level (defaults to EQCRYPT_LOG_LEVEL)
        json_output: Emit JSON lines (defaults to EQCRYPT_LOG_JSON)

    Returns:
        Configured root logger
    """
    global _service_name
    _service_name = service_name

    config = EngineConfig()
    level = (level or config.log_level).upper()
    if json_output is None:
        json_output = config.log_json
    numeric_level = getattr(logging, level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        ))
    root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    structlog.get_logger(__name__).info(
        "Logging configured", log_level=level, json_output=json_output
    )
    return root_logger
