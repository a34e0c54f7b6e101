from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

NOISY_LOGGERS = ("uvicorn.access", "botocore", "boto3", "s3transfer", "urllib3", "sqlalchemy.engine")


class JsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that always carries ``level``/``logger`` and the service context."""

    def __init__(self, *args: Any, context: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._context = dict(context or {})

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:  # type: ignore[override]
        super().add_fields(log_record, record, message_dict)
        # "%(level)s" in the format string pre-populates the key with None
        if not log_record.get("level"):
            log_record["level"] = record.levelname
        if not log_record.get("logger"):
            log_record["logger"] = record.name
        for key, value in self._context.items():
            log_record.setdefault(key, value)
        if record.exc_info and not log_record.get("exc_info"):
            log_record["exc_info"] = self.formatException(record.exc_info)


def setup_json_logging(level: str = "INFO", service: Optional[str] = None, environment: Optional[str] = None) -> None:
    """Route every log record through a single JSON handler on stdout.

    ``service`` and ``environment`` are stamped on each record so log lines
    from several deployments can share one sink.
    """
    root = logging.getLogger()
    root.setLevel(level)
    # uvicorn installs its own handlers before the app factory runs
    for handler in list(root.handlers):
        root.removeHandler(handler)

    context = {k: v for k, v in {"service": service, "environment": environment}.items() if v}
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter("%(asctime)s %(level)s %(name)s %(message)s", context=context))
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
