from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

from google.cloud import logging as cloud_logging

# Request id of the autogen invocation being served
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "request_id"}


class RequestIdFilter(logging.Filter):
    """Stamps every record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging compatible with Cloud Logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "request_id", None) or request_id_var.get()
        if request_id:
            log_obj["request_id"] = request_id

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


NOISY_LOGGERS = ("google", "httpx", "httpcore", "urllib3")


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    use_cloud_logging: bool = True,
) -> None:
    """Route application logs to Cloud Logging in deployed environments.

    Dev (or a missing project id) gets JSON lines on stdout instead. Both
    paths stamp records with the request id of the autogen call.

    Args:
        environment: Deployment name; "dev" enables debug output
        project_id: GCP project that receives the log entries
        use_cloud_logging: Set False to force stdout even when deployed
    """
    level = logging.DEBUG if environment == "dev" else logging.INFO

    if use_cloud_logging and project_id and environment != "dev":
        cloud_logging.Client(project=project_id).setup_logging(log_level=level)
        handlers = logging.getLogger().handlers
    else:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(StructuredFormatter())
        logging.basicConfig(level=level, handlers=[stream], force=True)
        handlers = [stream]

    for handler in handlers:
        handler.addFilter(RequestIdFilter())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_request_id(request_id: str) -> None:
    """Set the request id for the current context."""
    request_id_var.set(request_id)


def get_request_id() -> str | None:
    """Get the request id from the current context."""
    return request_id_var.get()


__all__ = [
    "setup_logging",
    "set_request_id",
    "get_request_id",
    "RequestIdFilter",
    "StructuredFormatter",
]
