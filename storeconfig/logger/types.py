"""Types and constants for structured logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class Level(str, Enum):
    """Log level, ordered from the most verbose to the most severe."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: str | None, default: "Level") -> "Level":
        """Parse a level name, falling back to ``default`` for unknown names."""
        if not value:
            return default
        normalized = value.strip().lower()
        if normalized == "warning":
            normalized = "warn"
        try:
            return cls(normalized)
        except ValueError:
            return default


_SEVERITY = {level: index for index, level in enumerate(Level)}


class Category(str, Enum):
    """Category groups log events by the part of the tool that emitted them."""

    DATABASE = "database"  # MySQL / core_config_data access
    SECURITY = "security"  # value decryption
    PIPELINE = "pipeline"  # query -> format -> render flow
    RENDER = "render"  # output rendering
    CLI = "cli"  # command line surface


@dataclass
class LogEntry:
    """A single log record as handed to a writer."""

    timestamp: datetime
    service_name: str
    environment: str
    level: Level
    message: str
    category: Category | None = None
    function_name: str | None = None
    file_path: str | None = None
    line_number: int | None = None
    error_message: str | None = None
    context: dict[str, Any] | None = None
    duration_ms: int | None = None


@dataclass
class Field:
    """Field carries structured data attached to a log record."""

    key: str
    value: Any


def param(key: str, value: Any) -> Field:
    return Field(key=key, value=value)


def duration_ms(value: int) -> Field:
    return Field(key="duration_ms", value=value)

