"""Exception types raised by the adapter.

Only configuration problems, connection failures and unknown server
reasons are raised. Every other per-request outcome is recorded on the
notification instead.
"""

from typing import Any


class PushError(Exception):
    """Base class for adapter errors."""


class ConfigError(PushError):
    """A config cannot be put into service."""

    def __init__(self, reason: str, config: Any = None) -> None:
        super().__init__(f"{reason}: {config!r}" if config is not None else reason)
        self.reason = reason
        self.config = config


class MissingRequiredField(ConfigError):
    def __init__(self, field: str) -> None:
        super().__init__(f"missing required option {field!r}")
        self.field = field


class TransportUnavailable(PushError):
    """The HTTP/2 transport could not open a connection."""

    def __init__(self, host: str, port: int, cause: BaseException | None = None) -> None:
        super().__init__(f"could not connect to {host}:{port}: {cause}")
        self.host = host
        self.port = port
        self.cause = cause


class UnrecognizedServerReason(PushError):
    """The server sent an error reason that is not in ``ErrorReason``.

    Extend ``ErrorReason`` when this fires.
    """

    def __init__(self, reason: Any, key: str | None = None) -> None:
        super().__init__(f"unrecognized server error reason: {reason!r}")
        self.reason = reason
        self.key = key
