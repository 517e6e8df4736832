"""Backend adapter interface consumed by the push dispatcher."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from fcm_push.notification import Notification
from fcm_push.transport import ConnectOptions, Headers, Http2Client, Http2Session, StreamResult

OnResponse = Callable[[Notification], None]


class Configurable(ABC):
    """Protocol knowledge one push backend supplies to the dispatcher.

    The dispatcher owns connections, scheduling and retries; it only ever
    holds a ``Configurable`` and never the concrete backend type.
    """

    @abstractmethod
    def worker_name(self) -> Any:
        """Name used by the dispatcher to route to this backend, or None."""

    @abstractmethod
    def max_demand(self) -> int:
        """Maximum notifications in flight per connection."""

    @abstractmethod
    def connect_socket_options(self) -> ConnectOptions: ...

    @abstractmethod
    def connect(self, client: Http2Client | None = None) -> Http2Session: ...

    @abstractmethod
    def push_headers(self, notification: Notification) -> Headers: ...

    @abstractmethod
    def push_payload(self, notification: Notification) -> bytes: ...

    @abstractmethod
    def handle_end_stream(
        self,
        stream: StreamResult,
        notification: Notification,
        on_response: OnResponse | None = None,
    ) -> None:
        """Classify a finished stream and report it to *on_response*.

        Implementations must invoke *on_response* at most once.
        """

    @abstractmethod
    def schedule_ping(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def validate(self) -> None:
        """Raise ConfigError unless the config can be put into service."""
