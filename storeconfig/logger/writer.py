"""Log writers.

stdout is reserved for command output (tables, scripts), so every record
goes to stderr as one JSON object per line.
"""

import json
import sys
from typing import Any, Protocol, TextIO

from storeconfig.logger.types import Level, LogEntry


class LogWriter(Protocol):
    def write(self, entry: LogEntry) -> None: ...


class StderrWriter:
    """StderrWriter prints log entries as JSON lines, dropping those below ``min_level``."""

    def __init__(self, min_level: Level = Level.WARN, stream: TextIO | None = None) -> None:
        """
        Initialize StderrWriter.

        Args:
            min_level: Lowest level that is still written
            stream: Target stream, defaults to ``sys.stderr`` at write time
        """
        self.min_level = min_level
        self.stream = stream

    def write(self, entry: LogEntry) -> None:
        """Serialize and print a single entry."""
        if entry.level.severity < self.min_level.severity:
            return

        data: dict[str, Any] = {
            "timestamp": entry.timestamp.isoformat(),
            "level": entry.level.value,
            "category": entry.category.value if entry.category else None,
            "message": entry.message,
            "service_name": entry.service_name,
            "environment": entry.environment,
        }
        if entry.function_name:
            data["caller"] = f"{entry.file_path}:{entry.line_number} {entry.function_name}"
        if entry.error_message:
            data["error"] = entry.error_message
        if entry.context:
            data["context"] = entry.context
        if entry.duration_ms is not None:
            data["duration_ms"] = entry.duration_ms

        stream = self.stream or sys.stderr
        print(json.dumps(data, default=str), file=stream)


class NullWriter:
    """Discards every entry."""

    def write(self, entry: LogEntry) -> None:
        pass
