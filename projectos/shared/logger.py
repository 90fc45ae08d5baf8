"""
Logging setup shared by every ProjectOS module.

Each module asks for a logger tagged with a service name ("store",
"assistant", "api", ...). Output goes to stdout, either as readable text or,
with LOG_FORMAT=json, as one JSON object per line.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s - %(service)s - %(levelname)s - %(message)s"

# Fields read straight off the record when no payload dict was given
PROMOTED_FIELDS = ("identifier", "error", "error_kind", "duration_ms")

# Everything a bare LogRecord carries; other attributes arrived via `extra`
_BUILTIN_ATTRS = frozenset(logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__) | {
    "message",
    "service",
    "payload",
}


def _wants_json() -> bool:
    return os.getenv("LOG_FORMAT", "text").strip().lower() == "json"


class ServiceFilter(logging.Filter):
    """Tag records with the service that emitted them."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = getattr(record, "service", self.service_name)
        return True


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Keys passed as extra={"payload": {...}} become top-level fields, so
    `identifier`, `error_kind` and friends can be filtered on directly.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": getattr(record, "service", "unknown"),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        payload = getattr(record, "payload", None)
        if isinstance(payload, dict):
            entry.update(payload)
        else:
            entry.update(
                (field, getattr(record, field))
                for field in PROMOTED_FIELDS
                if getattr(record, field, None) is not None
            )

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _BUILTIN_ATTRS and not key.startswith("_")
        }
        for key, value in extras.items():
            entry.setdefault(key, value)

        # Dates, paths and enums fall back to str()
        return json.dumps(entry, ensure_ascii=False, default=str)


def get_logger(service_name: str, name: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Return a stdout logger tagged with `service_name`.

    Calling it again for the same logger name swaps the handler, which picks
    up a changed LOG_FORMAT.

    Args:
        service_name: Service tag written on every record (e.g. "store").
        name: Logger name, usually `__name__`; defaults to service_name.
        level: Minimum level; INFO by default.

    Example:
        logger = get_logger("store", __name__)
        logger.info("Created project", extra={"payload": {"identifier": "roof.md"}})
    """
    logger = logging.getLogger(name or service_name)
    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if _wants_json() else logging.Formatter(TEXT_FORMAT))
    handler.addFilter(ServiceFilter(service_name))
    logger.handlers = [handler]
    return logger
