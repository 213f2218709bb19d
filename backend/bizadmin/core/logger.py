"""Logging setup: console output stamped with the current request id."""

import json
import logging
from contextvars import ContextVar
from logging import LogRecord

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_configured = False


class JsonFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


class RequestIdFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get() or "-"
        return True


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Install a single stream handler on the root logger. Idempotent."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s [%(request_id)s] - %(message)s"
        ))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())
    _configured = True
