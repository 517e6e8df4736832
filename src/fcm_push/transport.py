"""HTTP/2 transport seam used by the adapter to open sessions.

The adapter only assembles ``ConnectOptions`` and hands them to an
``Http2Client``. The default client is built on httpx with HTTP/2
enabled; dispatchers (and tests) can install their own with
``set_default_client``.
"""

import logging
import socket
import ssl
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from fcm_push.errors import TransportUnavailable

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"https": 443, "http": 80}

Headers = Sequence[tuple[str, str]]


@dataclass(frozen=True, slots=True)
class ConnectOptions:
    """Socket options for one HTTP/2 connection.

    ``port`` is only set when it differs from the scheme default.
    """

    active: str = "once"
    packet: str = "raw"
    reuseaddr: bool = True
    alpn_protocols: tuple[str, ...] = ("h2",)
    binary: bool = True
    port: int | None = None


@dataclass(frozen=True, slots=True)
class StreamResult:
    """Outcome of one request/response exchange on a stream."""

    error: object | None = None
    status: int | None = None
    body: bytes = b""


class Http2Session(ABC):
    @abstractmethod
    def request(self, headers: Headers, body: bytes) -> StreamResult:
        """Send one request and wait for its stream to end.

        Transport failures are returned as ``StreamResult(error=...)``.
        """

    @abstractmethod
    def close(self) -> None:
        """Tear the connection down."""


class Http2Client(ABC):
    @abstractmethod
    def connect(self, host: str, scheme: str, options: ConnectOptions) -> Http2Session:
        """Open a session to *host*.

        Raises TransportUnavailable when the connection cannot be set up.
        """


class HttpxHttp2Session(Http2Session):
    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def request(self, headers: Headers, body: bytes) -> StreamResult:
        method, path, regular = _split_pseudo_headers(headers)
        try:
            response = self._client.request(method, path, headers=regular, content=body)
        except httpx.TransportError as exc:
            logger.warning(
                "HTTP/2 stream failed",
                extra={"path": path, "error": repr(exc)},
            )
            return StreamResult(error=exc)
        return StreamResult(status=response.status_code, body=response.content)

    def close(self) -> None:
        self._client.close()


class HttpxHttp2Client(Http2Client):
    """Opens httpx clients speaking HTTP/2 over TLS."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def connect(self, host: str, scheme: str, options: ConnectOptions) -> HttpxHttp2Session:
        port = options.port or DEFAULT_PORTS[scheme]
        try:
            transport = self._transport or self._build_transport(options)
            client = httpx.Client(
                base_url=f"{scheme}://{host}:{port}",
                transport=transport,
                timeout=self._timeout,
            )
        except (OSError, httpx.HTTPError) as exc:
            raise TransportUnavailable(host, port, exc) from exc

        logger.debug("HTTP/2 session opened", extra={"host": host, "port": port})
        return HttpxHttp2Session(client)

    @staticmethod
    def _build_transport(options: ConnectOptions) -> httpx.HTTPTransport:
        context = ssl.create_default_context()
        context.set_alpn_protocols(list(options.alpn_protocols))

        socket_options = []
        if options.reuseaddr:
            socket_options.append((socket.SOL_SOCKET, socket.SO_REUSEADDR, 1))

        return httpx.HTTPTransport(
            verify=context,
            http1="http/1.1" in options.alpn_protocols,
            http2="h2" in options.alpn_protocols,
            socket_options=socket_options,
        )


def _split_pseudo_headers(headers: Headers) -> tuple[str, str, list[tuple[str, str]]]:
    method = "GET"
    path = "/"
    regular: list[tuple[str, str]] = []
    for name, value in headers:
        if name == ":method":
            method = value
        elif name == ":path":
            path = value
        elif not name.startswith(":"):
            regular.append((name, value))
    return method, path, regular


_default_client: Http2Client | None = None


def default_client() -> Http2Client:
    """Return the process-wide HTTP/2 client, creating it on first use."""
    global _default_client
    if _default_client is None:
        _default_client = HttpxHttp2Client()
    return _default_client


def set_default_client(client: Http2Client | None) -> None:
    """Install *client* as the default (``None`` restores the httpx client)."""
    global _default_client
    _default_client = client
