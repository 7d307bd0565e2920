"""
Unit tests for logging setup.
"""

import json
import logging


class TestJsonFormatter:

    def test_formats_record_as_json(self):
        from skilltree.utils import JsonFormatter

        record = logging.LogRecord("skilltree.test", logging.WARNING, __file__, 10, "Found %d items", (3,), None)
        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "WARNING"
        assert payload["message"] == "Found 3 items"
        assert payload["logger"] == "skilltree.test"
        assert "exception" not in payload


class TestConfigureLogging:

    def test_idempotent_and_writes_json_file(self, tmp_path):
        from skilltree.utils import configure_logging

        logger = logging.getLogger("skilltree")
        saved = logger.handlers[:]
        logger.handlers.clear()
        try:
            configure_logging("DEBUG", str(tmp_path))
            configure_logging("DEBUG", str(tmp_path))
            assert len(logger.handlers) == 2

            logging.getLogger("skilltree.research").info("hello")
            for handler in logger.handlers:
                handler.flush()

            line = (tmp_path / "skilltree.json.log").read_text().strip().splitlines()[-1]
            assert json.loads(line)["logger"] == "skilltree.research"
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved
