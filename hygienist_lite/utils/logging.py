"""
Logging setup for hygienist-lite.

``configure_logging(config)`` runs once per CLI command, after the config is
loaded. Library modules only call ``logging.getLogger(__name__)``.

Handlers
--------
- Console: always, on stderr, so command output on stdout stays clean for
  piping.
- File: when ``[logging] log_file`` is set. A relative path is resolved from
  the project root, like every other configured path.

Record context
--------------
Callers attach structured context with ``extra=``, e.g.::

    log.info("Follow-up updated.", extra={"patient_id": "patient-1"})

The JSON formatter lifts such keys to the top level of the line. Patient
contact details (``PATIENT_DETAIL_FIELDS``) are never written to a log line,
even when passed in ``extra``; the text formatter ignores extras entirely.

JSON line example (``json_format = true``)::

    {"ts": "2026-10-19T09:00:00Z", "level": "INFO",
     "logger": "hygienist_lite.storage.bundle", "msg": "...",
     "patient_id": "patient-1"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from hygienist_lite.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

PATIENT_DETAIL_FIELDS = frozenset({"name", "birthday", "phone", "email", "notes"})

_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict:
    """Return the ``extra=`` context on ``record``, minus patient details."""
    return {
        key: val
        for key, val in record.__dict__.items()
        if key not in _RESERVED
        and not key.startswith("_")
        and key not in PATIENT_DETAIL_FIELDS
    }


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``,
    optional ``exc``, then the record context."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line: dict = {
            "ts": ts.strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        line.update(record_context(record))
        return json.dumps(line, default=str, ensure_ascii=False)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonLineFormatter()
    formatter = logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    formatter.converter = _utc_struct_time
    return formatter


def _utc_struct_time(seconds: Optional[float]):
    return datetime.fromtimestamp(seconds or 0, tz=timezone.utc).timetuple()


def configure_logging(config: "LoggingConfig") -> None:
    """Install console (and optional file) handlers on the root logger.

    Replaces any handlers from an earlier call, so calling it again with a
    different config takes effect.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
    """
    from hygienist_lite.config import resolve_path

    level = logging.getLevelName(config.level.upper())
    formatter = _make_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = resolve_path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
