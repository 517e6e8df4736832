import json
import logging
import sys

import pytest

from fcm_push.config import get_settings
from fcm_push.log import JsonFormatter, log_error, setup_logging


class TestJsonFormatter:
    def test_formats_extra_fields(self) -> None:
        record = logging.LogRecord("fcm_push.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.notification_id = "n-1"

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "fcm_push.test"
        assert entry["message"] == "hello world"
        assert entry["notification_id"] == "n-1"
        assert "timestamp" in entry

    def test_includes_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_configures_root(self) -> None:
        setup_logging("DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_level_from_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("PUSH_LOG_LEVEL", "warning")

        setup_logging()

        assert logging.getLogger().level == logging.WARNING


class TestLogError:
    def test_silent_without_debug_log(self, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            log_error(400, "Malformed JSON")

        assert not caplog.records

    def test_logs_with_debug_log(self, caplog, monkeypatch) -> None:
        monkeypatch.setenv("PUSH_DEBUG_LOG", "true")
        get_settings.cache_clear()

        with caplog.at_level(logging.ERROR):
            log_error(400, "Malformed JSON")

        assert [r.getMessage() for r in caplog.records] == ["Malformed JSON: 400"]
