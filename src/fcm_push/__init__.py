"""Firebase Cloud Messaging HTTP v1 adapter for push delivery workers."""

from fcm_push.adapters import ConfigRegistry, create_default_registry
from fcm_push.adapters.base import Configurable
from fcm_push.adapters.fcm import FCMConfig, parse_error
from fcm_push.enums import ErrorReason, NotificationStatus
from fcm_push.errors import (
    ConfigError,
    MissingRequiredField,
    PushError,
    TransportUnavailable,
    UnrecognizedServerReason,
)
from fcm_push.notification import FCMNotification, Notification
from fcm_push.transport import ConnectOptions, StreamResult

__all__ = [
    "ConfigError",
    "ConfigRegistry",
    "Configurable",
    "ConnectOptions",
    "ErrorReason",
    "FCMConfig",
    "FCMNotification",
    "MissingRequiredField",
    "Notification",
    "NotificationStatus",
    "PushError",
    "StreamResult",
    "TransportUnavailable",
    "UnrecognizedServerReason",
    "create_default_registry",
    "parse_error",
]
