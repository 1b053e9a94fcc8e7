"""Structured logger."""

import inspect
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from storeconfig.logger.types import Category, Field, Level, LogEntry
from storeconfig.logger.writer import LogWriter, StderrWriter


class Logger:
    """Logger for structured records handed to a writer."""

    def __init__(
        self,
        service_name: str,
        environment: str,
        writer: LogWriter | None = None,
    ) -> None:
        """
        Initialize Logger.

        Args:
            service_name: Service name attached to every record
            environment: Environment (dev, stage, prod)
            writer: Destination of the records, stderr by default
        """
        self.service_name = service_name
        self.environment = environment
        self.writer: LogWriter = writer or StderrWriter()

        self._fields: dict[str, Any] = {}
        self._category: Category | None = None

    def debug(self, msg: str, *fields: Field) -> None:
        """Log debug level message."""
        self._log(Level.DEBUG, msg, None, *fields)

    def info(self, msg: str, *fields: Field) -> None:
        """Log info level message."""
        self._log(Level.INFO, msg, None, *fields)

    def warn(self, msg: str, *fields: Field) -> None:
        """Log warn level message."""
        self._log(Level.WARN, msg, None, *fields)

    def error(self, msg: str, err: Exception | None = None, *fields: Field) -> None:
        """Log error level message."""
        self._log(Level.ERROR, msg, err, *fields)

    def _log(
        self,
        level: Level,
        msg: str,
        err: Exception | None,
        *fields: Field,
    ) -> None:
        frame = inspect.currentframe()
        caller_frame = frame.f_back.f_back if frame and frame.f_back else None

        function_name = None
        file_path = None
        line_number = None

        if caller_frame:
            function_name = caller_frame.f_code.co_name
            file_path = self._clean_file_path(caller_frame.f_code.co_filename)
            line_number = caller_frame.f_lineno

        context: dict[str, Any] = dict(self._fields)
        for field in fields:
            context[field.key] = field.value

        duration_ms = context.pop("duration_ms", None)
        if duration_ms is not None:
            duration_ms = int(duration_ms)

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            service_name=self.service_name,
            environment=self.environment,
            level=level,
            category=self._category,
            function_name=function_name,
            file_path=file_path,
            line_number=line_number,
            message=msg,
            context=context if context else None,
            duration_ms=duration_ms,
        )

        if err:
            entry.error_message = str(err)
            if level is Level.ERROR and err.__traceback__ is not None:
                context = dict(entry.context or {})
                context["stack_trace"] = "".join(
                    traceback.format_exception(type(err), err, err.__traceback__)
                )
                entry.context = context

        self.writer.write(entry)

    def with_category(self, category: Category) -> "Logger":
        """Return a new logger bound to ``category``."""
        new_logger = self._copy()
        new_logger._category = category
        return new_logger

    def with_fields(self, *fields: Field) -> "Logger":
        """Return a new logger carrying additional fields."""
        new_logger = self._copy()
        for field in fields:
            new_logger._fields[field.key] = field.value
        return new_logger

    def _copy(self) -> "Logger":
        new_logger = Logger(self.service_name, self.environment, self.writer)
        new_logger._fields = dict(self._fields)
        new_logger._category = self._category
        return new_logger

    @staticmethod
    def _clean_file_path(file_path: str) -> str:
        """Strip everything before the package directory."""
        path = Path(file_path)

        parts = path.parts
        if "storeconfig" in parts:
            idx = parts.index("storeconfig")
            return str(Path(*parts[idx:]))

        return path.name


_global_logger: Logger | None = None


def get_logger() -> Logger:
    """Return the global logger, creating a stderr logger on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = Logger("storeconfig", "dev")
    return _global_logger


def init_logger(
    service_name: str,
    environment: str,
    writer: LogWriter | None = None,
) -> Logger:
    """
    Initialize the global logger.

    Args:
        service_name: Service name
        environment: Environment (dev, stage, prod)
        writer: Destination of the records

    Returns:
        Logger instance
    """
    global _global_logger
    _global_logger = Logger(service_name, environment, writer)
    return _global_logger
