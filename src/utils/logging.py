"""Structured JSON logging for the API.

Every record becomes one JSON line: timestamp, level, logger, message, any
exception text, and the fields passed through ``extra=``. Extra fields whose
name marks them as a credential are written as ``[REDACTED]``.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

REDACTED = '[REDACTED]'

# Lower-cased extra keys that may carry a secret
SENSITIVE_KEYS = frozenset({
    'password', 'currentpassword', 'newpassword', 'password_hash',
    'token', 'reset_password_token', 'resettoken', 'authorization', 'jwt_secret',
})

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'asctime'}


def _redact(key: str, value: Any) -> Any:
    return REDACTED if key.lower() in SENSITIVE_KEYS else value


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, _redact(key, value))
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not callable(value)
        )
        return json.dumps(entry, default=str)


def resolve_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a LOG_LEVEL value such as ``debug`` or ``WARNING`` to a logging level."""
    level = logging.getLevelName((value or '').strip().upper())
    return level if isinstance(level, int) else default


def setup_structured_logging(level: int | None = None):
    """Install the JSON formatter on the root and uvicorn access loggers.

    The level defaults to the LOG_LEVEL environment variable, INFO when unset.
    """
    if level is None:
        level = resolve_level(os.getenv('LOG_LEVEL'))

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    access = logging.getLogger("uvicorn.access")
    access.handlers = [handler]
    access.propagate = False
    access.setLevel(max(level, logging.WARNING))
