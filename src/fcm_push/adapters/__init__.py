"""Registry of backend configs keyed by worker name."""

from typing import Any

from fcm_push.adapters.base import Configurable
from fcm_push.adapters.fcm import FCMConfig
from fcm_push.config import PushSettings, get_settings


class ConfigRegistry:
    """Maps worker names to validated backend configs."""

    def __init__(self) -> None:
        self._configs: dict[Any, Configurable] = {}

    def register(self, config: Configurable) -> None:
        """Validate *config* and make it routable by its worker name.

        Raises ConfigError if the config cannot be put into service.
        """
        config.validate()
        self._configs[config.worker_name()] = config

    def get(self, name: Any) -> Configurable:
        """Return the config for a worker name.

        Raises KeyError if no config is registered under the name.
        """
        return self._configs[name]

    def names(self) -> list[Any]:
        return list(self._configs)


def create_default_registry(settings: PushSettings | None = None) -> ConfigRegistry:
    """Create a registry with one FCM config per named settings block."""
    if settings is None:
        settings = get_settings()
    registry = ConfigRegistry()
    for name in settings.fcm:
        registry.register(FCMConfig.from_name(name, settings.fcm))
    return registry
