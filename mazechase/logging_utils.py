"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level so generation and AI events stay grep-friendly without configuring the
stdlib logging tree.

Usage:
    from mazechase.logging_utils import get_logger
    log = get_logger("maze")
    log.info(event="maze_generated", width=15, height=15)

    # fields repeated on every line of one level build or simulation run
    run_log = get_logger("simulate").bind(seed=7, level_no=2)
    run_log.info(event="enemy_final", x=3, y=4)

All non-numeric values are str()'d with spaces replaced. ``level`` and ``ts``
are written by the logger itself; a caller field with either name is emitted
as ``level_field`` / ``ts_field`` instead of clobbering them.

Environment:
    MAZECHASE_LOG_LEVEL  debug|info|warn|error (default info)
    MAZECHASE_LOG_JSON   1/true/yes/on to emit JSON lines
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZECHASE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZECHASE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")

RESERVED = ("level", "ts")


def set_level(level: str) -> None:
    """Adjust the global threshold at runtime (CLI --verbose, tests)."""
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS.get(level.lower(), CURRENT_LEVEL)


def _safe_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {(f"{k}_field" if k in RESERVED else k): v for k, v in fields.items() if v is not None}


def _format(lvl: str, fields: Dict[str, Any]) -> str:
    ts = int(time.time())
    body = _safe_fields(fields)
    if JSON_MODE:
        rec = dict(body, level=lvl, ts=ts)
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": lvl, "ts": ts, "error": "json_encode_failed"})
    parts = [f"level={lvl}", f"ts={ts}"]
    for k, v in body.items():
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}=" + str(v).replace(" ", "_"))
    return " ".join(parts)


class _Logger:
    def __init__(self, name: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        self.name = name or "mazechase"
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        """Child logger that adds ``context`` to every record (not cached)."""
        return _Logger(self.name, {**self.context, **context})

    @staticmethod
    def enabled(lvl: str) -> bool:
        # Lets per-tick callers skip building fields for suppressed records.
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, fields: Dict[str, Any]) -> None:
        if not self.enabled(lvl):
            return
        record = {"logger": self.name, **self.context, **fields}
        print(_format(lvl, record), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", fields)

    def info(self, **fields):
        self._log("info", fields)

    def warn(self, **fields):
        self._log("warn", fields)

    def error(self, **fields):
        self._log("error", fields)


_LOGGER_CACHE: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazechase")
