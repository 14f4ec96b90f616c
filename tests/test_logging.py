"""Tests for praxis.core.logging."""

import io
import json
import logging

import pytest

from praxis.core.logging import StructuredFormatter, configure_logging


def _record(msg="hello %s", args=("world",), exc_info=None, **extra):
    record = logging.LogRecord(
        "praxis.test", logging.WARNING, __file__, 12, msg, args, exc_info, func="fn"
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_core_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert data["level"] == "WARNING"
        assert data["logger"] == "praxis.test"
        assert data["msg"] == "hello world"
        assert data["where"].endswith("fn:12")
        assert data["ts"].endswith("Z")

    def test_extra_fields(self):
        data = json.loads(StructuredFormatter().format(_record(action="pickUp", count=2)))
        assert data["action"] == "pickUp"
        assert data["count"] == 2

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = _record(exc_info=sys.exc_info())
        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestConfigureLogging:
    @pytest.fixture
    def logger_name(self):
        name = "praxis.test_configure"
        yield name
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_sets_level_only(self, logger_name):
        logger = configure_logging(level="debug", logger_name=logger_name)
        assert logger.level == logging.DEBUG
        assert logger.handlers == []
        assert logger.propagate

    def test_unknown_level_falls_back_to_info(self, logger_name):
        assert configure_logging(level="chatty", logger_name=logger_name).level == logging.INFO

    def test_structured(self, logger_name):
        logger = configure_logging(structured=True, logger_name=logger_name)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
        assert not logger.propagate

        configure_logging(structured=True, logger_name=logger_name)
        assert len(logger.handlers) == 1

    def test_plain_after_structured_restores_propagation(self, logger_name):
        configure_logging(structured=True, logger_name=logger_name)
        logger = configure_logging(structured=False, logger_name=logger_name)
        assert logger.handlers == []
        assert logger.propagate

    def test_application_handlers_survive(self, logger_name):
        own = logging.NullHandler()
        logging.getLogger(logger_name).addHandler(own)
        logger = configure_logging(structured=True, logger_name=logger_name)
        assert own in logger.handlers
        assert len(logger.handlers) == 2

    def test_structured_output_to_stream(self, logger_name):
        stream = io.StringIO()
        logger = configure_logging(
            structured=True, level=logging.DEBUG, logger_name=logger_name, stream=stream
        )
        logger.debug("loaded %d action(s)", 3, extra={"catalog": "actions.yaml"})
        data = json.loads(stream.getvalue())
        assert data["msg"] == "loaded 3 action(s)"
        assert data["catalog"] == "actions.yaml"
