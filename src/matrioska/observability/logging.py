"""Logging setup for matrioska.

Records are written as JSON lines to stderr. Structured context travels in
`extra={"extra_fields": {...}}` and is merged into the top level of the
entry, e.g. the factory's `event` names ('node_dropped', 'rule_dropped').
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

DEFAULT_LEVEL = "INFO"


class JsonFormatter(logging.Formatter):
    """Formats a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "component": record.name,
        }

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            entry.update(extra_fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Metas may carry values json cannot encode
        return json.dumps(entry, default=str)


def setup_logging(level: Optional[str] = None, stream=None):
    """Configures the root logger with a single JSON handler.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL env var, then INFO.
        stream: Output stream. Defaults to stderr so that command output on
            stdout stays machine readable.
    """
    log_level = (level or os.environ.get("LOG_LEVEL") or DEFAULT_LEVEL).upper()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers[:] = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
