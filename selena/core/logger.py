"""
Level-gated console logger for the Selena SDK.

Levels are ordered none < error < info < debug. A message is printed when its
severity rank is at or below the active level, immediately and without
buffering.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console

from .errors import ValidationError

LEVELS: Dict[str, int] = {
    "none": 0,
    "error": 1,
    "info": 2,
    "debug": 3,
}


class Logger:
    """Console logger with a fixed level. Replace the instance to change level."""

    def __init__(self, level: str = "none", console: Console = None):
        if level not in LEVELS:
            raise ValidationError(
                f"Invalid log level '{level}'. Use one of: {', '.join(LEVELS)}",
                "logging",
            )
        self.level = level
        self.console = console or Console(file=sys.stderr, highlight=False, soft_wrap=True)

    @property
    def enabled(self) -> bool:
        return LEVELS[self.level] > 0

    def _should_log(self, severity: str) -> bool:
        return self.enabled and LEVELS[severity] <= LEVELS[self.level]

    @staticmethod
    def _render(arg: Any) -> str:
        if isinstance(arg, (dict, list)):
            try:
                return json.dumps(arg, ensure_ascii=False, default=str)
            except (TypeError, ValueError):
                return str(arg)
        return str(arg)

    def _emit(self, severity: str, message: str, *args):
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        prefix = f"[{timestamp}] [Selena {severity.upper()}]"
        parts = [prefix, str(message)] + [self._render(a) for a in args]
        self.console.print(" ".join(parts), markup=False, highlight=False, emoji=False, soft_wrap=True)

    def debug(self, message: str, *args):
        if self._should_log("debug"):
            self._emit("debug", message, *args)

    def info(self, message: str, *args):
        if self._should_log("info"):
            self._emit("info", message, *args)

    def error(self, message: str, *args):
        if self._should_log("error"):
            self._emit("error", message, *args)

    def __repr__(self):
        return f"Logger(level={self.level!r})"
