"""
Structured logging setup (OCI Logging friendly).
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Union

CONTEXT_FIELDS = (
    "stage",
    "namespace",
    "bucket",
    "object",
    "status",
    "size",
    "pages",
    "path",
    "tenancy",
    "user",
    "region",
    "fingerprint",
)


class JsonFormatter(logging.Formatter):
    """JSON log formatter with stable keys."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for k in CONTEXT_FIELDS:
            if k in record.__dict__:
                payload[k] = record.__dict__[k]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: Optional[Union[str, int]] = None) -> None:
    """
    Route the root logger through a single JSON stream handler.

    Handlers installed by the fdk runtime or by pytest are left alone; only a
    previously installed JSON handler is replaced, since hot Fn containers
    re-import the handler module.
    """
    root = logging.getLogger()
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))
    for existing in list(root.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            root.removeHandler(existing)
    json_handler = logging.StreamHandler()
    json_handler.setFormatter(JsonFormatter())
    root.addHandler(json_handler)
