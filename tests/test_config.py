import json
import os
from unittest.mock import patch

from fcm_push.config import PushSettings, get_settings


class TestPushSettings:
    def test_defaults(self) -> None:
        settings = PushSettings()
        assert settings.log_level == "INFO"
        assert settings.debug_log is False
        assert settings.json_library == "json"
        assert settings.fcm == {}

    def test_from_env(self) -> None:
        env = {
            "PUSH_LOG_LEVEL": "DEBUG",
            "PUSH_DEBUG_LOG": "true",
            "PUSH_FCM": json.dumps(
                {"default": {"project_id": "my-project", "port": 5228}}
            ),
        }
        with patch.dict(os.environ, env, clear=False):
            settings = PushSettings()
        assert settings.log_level == "DEBUG"
        assert settings.debug_log is True
        assert settings.fcm["default"] == {"project_id": "my-project", "port": 5228}


class TestGetSettings:
    def test_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_reloads_env(self) -> None:
        first = get_settings()
        with patch.dict(os.environ, {"PUSH_DEBUG_LOG": "1"}, clear=False):
            get_settings.cache_clear()
            assert get_settings().debug_log is True
        assert first.debug_log is False
