from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class PushSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PUSH_")

    log_level: str = "INFO"
    debug_log: bool = False
    json_library: str = "json"

    # Named FCM endpoint blocks, e.g. PUSH_FCM='{"default": {"project_id": ...}}'
    fcm: dict[str, dict[str, Any]] = {}


@lru_cache(maxsize=1)
def get_settings() -> PushSettings:
    """Return the process-wide settings, loaded once from the environment."""
    return PushSettings()
