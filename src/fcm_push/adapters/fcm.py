"""Firebase Cloud Messaging HTTP v1 backend."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fcm_push import codec, transport
from fcm_push.adapters.base import Configurable, OnResponse
from fcm_push.auth import TokenProvider, TokenProviderRef
from fcm_push.config import get_settings
from fcm_push.enums import ALL_ERROR_REASONS, ErrorReason, NotificationStatus, underscore
from fcm_push.errors import ConfigError, MissingRequiredField, UnrecognizedServerReason
from fcm_push.log import log_error
from fcm_push.notification import Notification
from fcm_push.tasks import process_on_response
from fcm_push.transport import ConnectOptions, Http2Client, Http2Session, StreamResult

logger = logging.getLogger(__name__)

DEFAULT_HOST = "fcm.googleapis.com"
DEFAULT_PORT = 443
MAX_DEMAND = 100

# Common responses with stable meanings; their bodies are not parsed.
_FIXED_STATUSES: dict[int, tuple[NotificationStatus, str]] = {
    400: (NotificationStatus.MALFORMED_JSON, "Malformed JSON"),
    401: (NotificationStatus.UNAUTHORIZED, "Unauthorized"),
    500: (NotificationStatus.INTERNAL_SERVER_ERROR, "Internal server error"),
}


@dataclass(frozen=True, slots=True)
class FCMConfig(Configurable):
    """Connection and auth settings for one FCM endpoint.

    The constructor does not validate; call ``validate()`` before the
    config is put into service.
    """

    project_id: str | None = None
    token_provider: TokenProvider | None = None
    name: Any = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def new(cls, options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> "FCMConfig":
        """Build a config from an option mapping and/or keyword options.

        ``project_id`` and ``token_provider`` are required. The token
        provider may be a callable or a ``"module:function"`` reference,
        bound to the optional ``token_provider_args``.

        Raises MissingRequiredField when a required option is absent.
        """
        opts = {**(options or {}), **kwargs}
        for required in ("project_id", "token_provider"):
            if required not in opts:
                raise MissingRequiredField(required)

        return cls(
            name=opts.get("name"),
            host=opts.get("host", DEFAULT_HOST),
            port=int(opts.get("port") or DEFAULT_PORT),
            project_id=opts["project_id"],
            token_provider=_bind_token_provider(
                opts["token_provider"], opts.get("token_provider_args", ())
            ),
        )

    @classmethod
    def from_name(
        cls,
        name: Any,
        source: Mapping[Any, Mapping[str, Any]] | None = None,
    ) -> "FCMConfig":
        """Build the config registered under *name*.

        *source* defaults to the ``fcm`` blocks of ``PushSettings``.
        """
        if source is None:
            source = get_settings().fcm
        options = source.get(name)
        if options is None:
            raise ConfigError(f"no FCM configuration registered under {name!r}")
        return cls.new({**options, "name": name})

    def validate(self) -> None:
        if (
            isinstance(self.project_id, str)
            and self.project_id
            and callable(self.token_provider)
        ):
            return
        raise ConfigError(
            "attempted to start without valid project_id and/or token_provider",
            config=self,
        )

    def worker_name(self) -> Any:
        return self.name

    def max_demand(self) -> int:
        return MAX_DEMAND

    # Connection

    def connect_socket_options(self) -> ConnectOptions:
        port = None if self.port == DEFAULT_PORT else self.port
        return ConnectOptions(port=port)

    def connect(self, client: Http2Client | None = None) -> Http2Session:
        """Open a session to the endpoint. Does not retry."""
        if client is None:
            client = transport.default_client()
        return client.connect(self.host, "https", self.connect_socket_options())

    # Requests

    def push_headers(self, notification: Notification) -> list[tuple[str, str]]:
        token = self.token_provider().token
        return [
            (":method", "POST"),
            (":path", f"/v1/projects/{self.project_id}/messages:send"),
            ("authorization", f"Bearer {token}"),
            ("content-type", "application/json"),
            ("accept", "application/json"),
        ]

    def push_payload(self, notification: Notification) -> bytes:
        return notification.to_wire_payload()

    # Responses

    def handle_end_stream(
        self,
        stream: StreamResult,
        notification: Notification,
        on_response: OnResponse | None = None,
    ) -> None:
        # Without a callback only the catch-all branch still parses the body.
        if on_response is None and (stream.error is not None or stream.status == 200):
            return
        process_on_response(on_response, self.classify(stream, notification))

    def classify(self, stream: StreamResult, notification: Notification) -> Notification:
        """Return a copy of *notification* carrying the stream's outcome.

        Raises UnrecognizedServerReason for error reasons missing from
        ``ErrorReason``.
        """
        if stream.error is not None:
            return notification.model_copy(update={"status": NotificationStatus.UNAVAILABLE})

        code = stream.status
        if code == 200:
            notification = notification.model_copy(update={"status": NotificationStatus.SUCCESS})
            return _parse_result(stream.body, notification)

        fixed = _FIXED_STATUSES.get(code)
        if fixed is not None:
            status, reason = fixed
            log_error(code, reason)
            return notification.model_copy(update={"status": status})

        reason = parse_error(stream.body)
        log_error(code, reason)
        return notification.model_copy(update={"response": reason})

    # Lifecycle

    def schedule_ping(self) -> None:
        pass

    def close(self) -> None:
        pass


def parse_error(data: bytes | str | Mapping[str, Any]) -> str:
    """Normalize an error body into an ``ErrorReason``.

    *data* is either the raw response body or an already decoded error
    object. A body that is not JSON yields a diagnostic string instead.

    Raises UnrecognizedServerReason when the reason is not a known one.
    """
    if isinstance(data, Mapping):
        response: Any = data
    else:
        try:
            response = codec.decode(data)
        except ValueError as exc:
            return _parse_failure(exc, data)

    raw = _extract_reason(response)
    key = underscore(raw) if isinstance(raw, str) else None
    if key not in ALL_ERROR_REASONS:
        logger.error("Unrecognized FCM error reason", extra={"reason": raw, "key": key})
        raise UnrecognizedServerReason(raw, key)
    return ErrorReason(key)


def _parse_result(body: bytes, notification: Notification) -> Notification:
    try:
        result = codec.decode(body)
    except ValueError as exc:
        return notification.model_copy(update={"response": _parse_failure(exc, body)})

    if isinstance(result, Mapping):
        if "name" in result:
            return notification.model_copy(update={"response": NotificationStatus.SUCCESS})
        if "error" in result:
            return notification.model_copy(update={"response": parse_error(result)})

    logger.warning(
        "Success response without message name",
        extra={"registration_id": notification.registration_id},
    )
    return notification


def _extract_reason(response: Any) -> Any:
    """Find the reason in legacy (``reason``) or HTTP v1 error bodies.

    HTTP v1 candidates are tried in order: ``FcmError`` error codes,
    ``ErrorInfo`` reasons, then the google.rpc ``status``. The first known
    reason wins; if none is known the most specific candidate is returned.
    """
    if isinstance(response, str):
        return response
    if not isinstance(response, Mapping):
        return None
    if "reason" in response:
        return response["reason"]

    error = response.get("error")
    if error is not None:
        return _extract_reason(error)

    candidates = _v1_reason_candidates(response)
    for candidate in candidates:
        if underscore(candidate) in ALL_ERROR_REASONS:
            return candidate
    return candidates[0] if candidates else None


def _v1_reason_candidates(error: Mapping[str, Any]) -> list[str]:
    error_codes: list[str] = []
    info_reasons: list[str] = []
    for detail in error.get("details") or ():
        if not isinstance(detail, Mapping):
            continue
        if isinstance(detail.get("errorCode"), str):
            error_codes.append(detail["errorCode"])
        elif isinstance(detail.get("reason"), str):
            info_reasons.append(detail["reason"])

    status = error.get("status")
    return error_codes + info_reasons + ([status] if isinstance(status, str) else [])


def _parse_failure(exc: ValueError, body: bytes | str) -> str:
    message = f"JSON parse failed: {exc!r}, body: {body!r}"
    logger.error(message)
    return message


def _bind_token_provider(provider: Any, args: Sequence[Any]) -> Any:
    if isinstance(provider, str):
        return TokenProviderRef.parse(provider, args)
    return provider
