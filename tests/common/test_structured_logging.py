"""Tests for structured logging utilities."""

import json
import logging

import pytest
from distpack.common.logging import (
    LogContext,
    SimpleFormatter,
    StructuredFormatter,
    setup_logging,
)


def _record(msg="Skipped archiving", **attrs):
    record = logging.LogRecord("distpack.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestStructuredFormatter:
    """Tests for the JSON formatter."""

    def test_basic_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "distpack.test"
        assert data["message"] == "Skipped archiving"

    def test_extra_fields_are_merged(self):
        record = _record(extra_fields={"out_file": "/dist/app.zip", "reason": "archive file is up to date"})

        data = json.loads(StructuredFormatter().format(record))

        assert data["out_file"] == "/dist/app.zip"
        assert data["reason"] == "archive file is up to date"

    def test_non_json_values_are_stringified(self, tmp_path):
        data = json.loads(StructuredFormatter().format(_record(extra_fields={"path": tmp_path})))
        assert data["path"] == str(tmp_path)


class TestSimpleFormatter:
    """Tests for the console formatter."""

    def test_appends_fields(self):
        line = SimpleFormatter().format(_record(extra_fields={"option": "dict_size", "value": 64}))

        assert line.startswith("INFO")
        assert "option=dict_size" in line
        assert "value=64" in line

    def test_plain_message(self):
        assert SimpleFormatter().format(_record()).endswith("| Skipped archiving")


class TestLogContext:
    """Tests for LogContext."""

    def test_fields_attached_inside_context(self):
        logger = logging.getLogger("distpack.test")
        factory = logging.getLogRecordFactory()

        with LogContext(logger, out_file="/dist/app.7z"):
            record = logging.getLogRecordFactory()("distpack.test", logging.INFO, __file__, 1, "msg", None, None)
            data = json.loads(StructuredFormatter().format(record))

        assert data["out_file"] == "/dist/app.7z"
        assert logging.getLogRecordFactory() is factory

    def test_nested_contexts_merge(self):
        logger = logging.getLogger("distpack.test")

        with LogContext(logger, format="zip"):
            with LogContext(logger, out_file="/dist/app.zip"):
                record = logging.getLogRecordFactory()("distpack.test", logging.INFO, __file__, 1, "msg", None, None)

        assert record.context_fields == {"format": "zip", "out_file": "/dist/app.zip"}

    def test_works_with_extra_fields(self, caplog):
        """LogContext and extra={"extra_fields": ...} can be combined."""
        logger = logging.getLogger("distpack.test")

        with caplog.at_level(logging.INFO, logger="distpack.test"):
            with LogContext(logger, job="release"):
                logger.info("Using zip", extra={"extra_fields": {"reason": "nfd"}})

        record = caplog.records[-1]
        data = json.loads(StructuredFormatter().format(record))
        assert data["job"] == "release"
        assert data["reason"] == "nfd"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler_format(self, restore_root_logger):
        setup_logging(level="debug", format="json")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)

    def test_file_handler(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "distpack.log"

        setup_logging(level="INFO", format="simple", log_file=log_file)
        logging.getLogger("distpack.test").info("written")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "written"
        for handler in restore_root_logger.handlers:
            handler.close()
