"""Tests for logger setup."""

import json
import logging

from persona_engine.utils.logger import JSONFormatter, setup_logger


class TestSetupLogger:
    def test_level_by_name(self) -> None:
        assert setup_logger("persona_engine.test.debug", "debug").level == logging.DEBUG

    def test_unknown_level_name_is_info(self) -> None:
        assert setup_logger("persona_engine.test.unknown", "chatty").level == logging.INFO

    def test_json_handler(self) -> None:
        logger = setup_logger("persona_engine.test.json", json_output=True)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)


class TestJSONFormatter:
    def test_context_fields_are_included(self) -> None:
        record = logging.LogRecord("persona_engine", logging.INFO, __file__, 10, "extracted", None, None)
        record.source = "reply"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "extracted"
        assert data["level"] == "INFO"
        assert data["source"] == "reply"
        assert "intent" not in data
