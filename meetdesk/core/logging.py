"""Logging configuration for meetdesk.

Two output shapes, chosen by LOG_JSON:

  _ContainerFormatter: one human-readable line per record, for a
  terminal during local development.

  _JsonFormatter: one JSON object per line, for log aggregation in
  production. Request context fields set by the RequestContextMiddleware
  become top-level keys.

Both print the request id, which the request context filter copies onto
each record; records logged outside a request show "-".
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, UTC).isoformat(
        timespec="milliseconds"
    )


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout.

    WARNING and above get the [filename:lineno] of the call site; stack
    traces follow when exc_info is present.
    """

    _LOC_SUFFIX = "  [%(filename)s:%(lineno)d]"

    def format(self, record: logging.LogRecord) -> str:
        line = "{ts} {level:<8} {name} req={req}  {msg}".format(
            ts=_timestamp(record),
            level=record.levelname,
            name=record.name,
            req=getattr(record, "request_id", "-"),
            msg=record.getMessage(),
        )
        if record.levelno >= logging.WARNING:
            line += self._LOC_SUFFIX % {
                "filename": record.filename,
                "lineno": record.lineno,
            }
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter."""

    _CONTEXT_FIELDS = (
        "request_id",
        "method",
        "path",
        "status_code",
        "duration_ms",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self._CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger to write to stdout.

    Unknown level names fall back to INFO. httpx, httpcore and uvicorn
    are held at WARNING or above.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
