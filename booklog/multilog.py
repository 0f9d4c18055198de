"""Structured JSON logging fanned out to several writers."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, Protocol, TextIO


class Level(IntEnum):
    """Severity levels, ordered so that higher is more severe."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


class Logger(Protocol):
    """Anything that can log informational and error messages."""

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an informational message with attributes."""

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an error message with attributes."""


class JsonLogger:
    """Writes one JSON object per line to a writer, dropping records below ``level``."""

    def __init__(self, writer: Any, level: Level = Level.INFO) -> None:
        self.writer = writer
        self.level = Level(level)

    def _log(self, level: Level, msg: str, attrs: dict[str, Any]) -> None:
        if level < self.level:
            return
        record: dict[str, Any] = {
            "time": datetime.now().astimezone().isoformat(timespec="milliseconds"),
            "level": level.name,
            "msg": msg,
        }
        record.update(attrs)
        line = json.dumps(record, default=str, ensure_ascii=False, separators=(",", ":"))
        try:
            self.writer.write(line + "\n")
        except OSError:
            # A failing sink must never break the caller.
            pass

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.INFO, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(Level.ERROR, msg, kwargs)


class MultiSourceLogger:
    """Sends every record to a JSON logger per writer and one for standard output."""

    def __init__(
        self,
        *writers: Any,
        level: Level = Level.INFO,
        stdout: TextIO | None = None,
    ) -> None:
        sinks = [*writers, stdout if stdout is not None else sys.stdout]
        self.loggers = [JsonLogger(sink, level) for sink in sinks]

    def info(self, msg: str, **kwargs: Any) -> None:
        for logger in self.loggers:
            logger.info(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        for logger in self.loggers:
            logger.error(msg, **kwargs)