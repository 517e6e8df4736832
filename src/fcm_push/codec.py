"""Pluggable JSON codec, selected by ``PushSettings.json_library``."""

import importlib
from types import ModuleType
from typing import Any

from fcm_push.config import get_settings


def json_library() -> ModuleType:
    """Return the configured JSON module (anything exposing loads/dumps)."""
    return importlib.import_module(get_settings().json_library)


def decode(data: bytes | str) -> Any:
    """Decode a JSON document.

    Raises ValueError on malformed input (``json.JSONDecodeError`` and
    ``orjson.JSONDecodeError`` are both ValueError subclasses).
    """
    return json_library().loads(data)


def encode(value: Any) -> bytes:
    """Encode *value* as UTF-8 JSON bytes."""
    encoded = json_library().dumps(value)
    if isinstance(encoded, str):
        encoded = encoded.encode("utf-8")
    return encoded
