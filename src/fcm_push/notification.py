"""Notification models handed to the adapter by the dispatcher."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from fcm_push import codec
from fcm_push.enums import NotificationStatus


class Notification(BaseModel, ABC):
    """A push message plus its delivery outcome.

    Instances are immutable: the adapter reports an outcome by returning
    a copy with ``status``/``response`` replaced.
    """

    model_config = ConfigDict(frozen=True)

    status: NotificationStatus | None = None
    response: str | None = None
    registration_id: str | None = None

    @abstractmethod
    def to_wire_payload(self) -> bytes:
        """Serialize the message body sent on the wire."""


_TARGETS = ("token", "topic", "condition")
_BLOCKS = ("notification", "data", "android", "apns", "webpush", "fcm_options")


class FCMNotification(Notification):
    """An HTTP v1 ``messages:send`` message addressed to one target."""

    token: str | None = None
    topic: str | None = None
    condition: str | None = None

    notification: dict[str, Any] | None = None
    data: dict[str, str] | None = None
    android: dict[str, Any] | None = None
    apns: dict[str, Any] | None = None
    webpush: dict[str, Any] | None = None
    fcm_options: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _check_target(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        targets = [key for key in _TARGETS if values.get(key) is not None]
        if len(targets) != 1:
            raise ValueError(
                f"exactly one of {', '.join(_TARGETS)} is required, got {targets or 'none'}"
            )
        if values.get("registration_id") is None and values.get("token") is not None:
            values = {**values, "registration_id": values["token"]}
        return values

    @property
    def target(self) -> tuple[str, str]:
        for key in _TARGETS:
            value = getattr(self, key)
            if value is not None:
                return key, value
        raise AssertionError("notification has no target")

    def to_wire_payload(self) -> bytes:
        key, value = self.target
        message: dict[str, Any] = {key: value}
        for block in _BLOCKS:
            content = getattr(self, block)
            if content:
                message[block] = content
        return codec.encode({"message": message})
