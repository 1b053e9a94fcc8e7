"""Structured logger."""

import io
import json

from storeconfig.logger.logger import Logger, get_logger, init_logger
from storeconfig.logger.types import Category, Level, duration_ms, param
from storeconfig.logger.writer import StderrWriter


def records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestLogger:
    def test_writes_json_lines(self):
        stream = io.StringIO()
        logger = Logger("storeconfig", "test", StderrWriter(Level.DEBUG, stream))

        logger.with_category(Category.DATABASE).info("Fetched", param("rows", 2), duration_ms(5))

        [record] = records(stream)
        assert record["level"] == "info"
        assert record["category"] == "database"
        assert record["message"] == "Fetched"
        assert record["context"] == {"rows": 2}
        assert record["duration_ms"] == 5
        assert "test_writes_json_lines" in record["caller"]

    def test_filters_by_level(self):
        stream = io.StringIO()
        logger = Logger("storeconfig", "test", StderrWriter(Level.WARN, stream))

        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("shown")

        assert [r["message"] for r in records(stream)] == ["shown"]

    def test_error_carries_message(self):
        stream = io.StringIO()
        logger = Logger("storeconfig", "test", StderrWriter(Level.DEBUG, stream))

        logger.error("failed", ValueError("boom"))

        assert records(stream)[0]["error"] == "boom"

    def test_with_fields(self):
        stream = io.StringIO()
        logger = Logger("storeconfig", "test", StderrWriter(Level.DEBUG, stream))

        logger.with_fields(param("path", "web/")).info("x")

        assert records(stream)[0]["context"] == {"path": "web/"}


class TestLevel:
    def test_parse(self):
        assert Level.parse("DEBUG", Level.WARN) is Level.DEBUG
        assert Level.parse("warning", Level.INFO) is Level.WARN
        assert Level.parse("nonsense", Level.WARN) is Level.WARN
        assert Level.parse(None, Level.ERROR) is Level.ERROR


def test_init_logger_replaces_global():
    logger = init_logger("svc", "prod")

    assert get_logger() is logger
    assert logger.service_name == "svc"
