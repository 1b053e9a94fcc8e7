"""Logger module for storeconfig."""

from storeconfig.logger.logger import Logger, get_logger, init_logger
from storeconfig.logger.types import Category, Field, Level, LogEntry
from storeconfig.logger.writer import NullWriter, StderrWriter

__all__ = [
    "Logger",
    "get_logger",
    "init_logger",
    "StderrWriter",
    "NullWriter",
    "Category",
    "Level",
    "LogEntry",
    "Field",
]
