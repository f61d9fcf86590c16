from __future__ import annotations

import json
import logging

from personakit_core.logging import JSONFormatter, get_logger, setup_logging


class TestLogging:
    def test_setup_is_idempotent(self):
        first = setup_logging("DEBUG")
        second = setup_logging("ERROR")
        assert first is second
        assert len(first.handlers) == 1
        assert first.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging("chatty")
        assert logger.level == logging.INFO

    def test_get_logger_namespace(self):
        assert get_logger("templates.registry").name == "personakit.templates.registry"

    def test_json_formatter(self):
        record = logging.LogRecord(
            "personakit.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None
        )
        payload = json.loads(JSONFormatter().format(record))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "personakit.test"
        assert payload["msg"] == "hello world"
        assert "exc" not in payload
