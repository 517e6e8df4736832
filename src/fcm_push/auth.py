"""Bearer token providers for the FCM HTTP v1 API."""

import importlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import google.auth.transport.requests
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

FIREBASE_MESSAGING_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"


class HasToken(Protocol):
    token: str


TokenProvider = Callable[[], HasToken]


@dataclass(frozen=True, slots=True)
class TokenProviderRef:
    """A token provider named by module, function and bound arguments.

    Resolved on every call so the target can be swapped per deployment
    through configuration alone.
    """

    module: str
    function: str
    args: tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, reference: str, args: Sequence[Any] = ()) -> "TokenProviderRef":
        """Build a ref from ``"package.module:function"``."""
        module, sep, function = reference.partition(":")
        if not sep or not module or not function:
            raise ValueError(
                f"token provider reference must look like 'module:function', got {reference!r}"
            )
        return cls(module=module, function=function, args=tuple(args))

    def __call__(self) -> HasToken:
        target = getattr(importlib.import_module(self.module), self.function)
        return target(*self.args)


class GoogleCredentialsProvider:
    """Hands out google-auth credentials, refreshing them when expired.

    The returned credentials expose the access token as ``.token``.
    """

    def __init__(self, credentials: Any) -> None:
        self._credentials = credentials
        self._request = google.auth.transport.requests.Request()

    @classmethod
    def from_service_account_file(cls, path: str) -> "GoogleCredentialsProvider":
        credentials = service_account.Credentials.from_service_account_file(
            path, scopes=[FIREBASE_MESSAGING_SCOPE]
        )
        return cls(credentials)

    def __call__(self) -> Any:
        if not self._credentials.valid:
            logger.debug("Refreshing FCM access token")
            self._credentials.refresh(self._request)
        return self._credentials


_service_account_providers: dict[str, GoogleCredentialsProvider] = {}


def service_account_token(path: str) -> Any:
    """Return fresh credentials for the service account key at *path*.

    Meant to be referenced from configuration, e.g.
    ``"token_provider": "fcm_push.auth:service_account_token"`` with
    ``"token_provider_args": ["/etc/fcm/key.json"]``.
    """
    provider = _service_account_providers.get(path)
    if provider is None:
        provider = GoogleCredentialsProvider.from_service_account_file(path)
        _service_account_providers[path] = provider
    return provider()
