"""Structured JSON logging for noty.

Each record is written as one JSON object per line::

    {"ts": "2026-01-01T12:00:00.123456+00:00", "level": "WARNING",
     "logger": "noty.retries", "message": "Transient failure, retrying",
     "op": "retry", "status_code": 429, "attempt": 1, "delay_seconds": 1.0}

Modules obtain their logger once at import time::

    from noty.observability import get_logger

    log = get_logger("noty.client")
    log.debug("page fetched", extra={"extra_fields": {"page_id": "abc"}})

Loggers are quiet by default (``WARNING``).  Set ``NOTY_LOG_LEVEL`` to a
level name such as ``DEBUG`` to see the client's per-operation records.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

LOG_LEVEL_ENV_VAR = "NOTY_LOG_LEVEL"

_HANDLER_MARK = "_noty_structured"


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a single JSON line.

    The keys ``ts``, ``level``, ``logger`` and ``message`` are always
    present.  A dict passed as ``extra={"extra_fields": {...}}`` is merged
    at the top level, and ``exception``/``stack_info`` appear when the
    record carries them.  Values that are not JSON-native are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


def _resolve_level(level: int | str) -> int:
    override = os.environ.get(LOG_LEVEL_ENV_VAR)
    if override:
        level = override
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.WARNING
    return level


def get_logger(
    name: str = "noty",
    *,
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Return the logger *name* with a structured JSON handler attached.

    The handler is added only once per logger, so the call is cheap to
    repeat.  *level* and *stream* only take effect on that first call.
    ``$NOTY_LOG_LEVEL``, when set, overrides *level*.
    """
    logger = logging.getLogger(name)
    if any(getattr(h, _HANDLER_MARK, False) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    setattr(handler, _HANDLER_MARK, True)

    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False
    return logger
