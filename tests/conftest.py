"""Test fixtures for fcm_push tests."""

from collections.abc import Generator
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from fcm_push import transport
from fcm_push.adapters.fcm import FCMConfig
from fcm_push.config import get_settings
from fcm_push.notification import FCMNotification


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload PushSettings from the (possibly patched) environment per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    transport.set_default_client(None)


@pytest.fixture()
def token_provider() -> MagicMock:
    """Token provider handing out a new token on every call."""
    tokens = (SimpleNamespace(token=f"token-{i}") for i in range(1, 1000))
    return MagicMock(side_effect=lambda: next(tokens))


@pytest.fixture()
def fcm_config(token_provider: MagicMock) -> FCMConfig:
    return FCMConfig.new(project_id="p1", token_provider=token_provider, name="test")


@pytest.fixture()
def notification() -> FCMNotification:
    return FCMNotification(
        token="device-token-1",
        notification={"title": "Order shipped", "body": "Your order is on its way"},
        data={"order_id": "42"},
    )
