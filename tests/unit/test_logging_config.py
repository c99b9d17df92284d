"""Unit tests for log record formatting and request correlation."""

import json
import logging
import sys

import pytest

from tsea.logging_config import (
    NO_REQUEST,
    JsonFormatter,
    RequestIdFilter,
    configure_logging,
    request_id_var,
)


def make_record(msg="Lesson completed", **extra):
    record = logging.LogRecord("tsea.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIdFilter:
    def test_tags_record_with_current_request(self):
        token = request_id_var.set("req-42")
        try:
            record = make_record()
            assert RequestIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-42"

    def test_placeholder_outside_a_request(self):
        record = make_record()
        RequestIdFilter().filter(record)
        assert record.request_id == NO_REQUEST


class TestJsonFormatter:
    def test_core_fields_and_extras(self):
        record = make_record(module_id="market-basics", request_id="req-1")
        entry = json.loads(JsonFormatter().format(record))
        assert entry["message"] == "Lesson completed"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "tsea.test"
        assert entry["request_id"] == "req-1"
        assert entry["module_id"] == "market-basics"
        assert "lineno" not in entry

    def test_unserializable_extra_is_stringified(self):
        record = make_record(path=object(), request_id=NO_REQUEST)
        entry = json.loads(JsonFormatter().format(record))
        assert entry["path"].startswith("<object object")
        assert "request_id" not in entry

    def test_exception_text_included(self):
        try:
            raise ValueError("bad curriculum")
        except ValueError:
            record = logging.LogRecord(
                "tsea.test", logging.ERROR, __file__, 1, "boom", None, sys.exc_info()
            )
        entry = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad curriculum" in entry["exception"]


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_production_uses_json(self):
        configure_logging(environment="production")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.INFO

    def test_reconfiguring_replaces_the_handler(self):
        configure_logging()
        configure_logging(debug=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
