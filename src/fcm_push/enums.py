import re
from enum import StrEnum


class NotificationStatus(StrEnum):
    SUCCESS = "success"
    UNAVAILABLE = "unavailable"
    MALFORMED_JSON = "malformed_json"
    UNAUTHORIZED = "unauthorized"
    INTERNAL_SERVER_ERROR = "internal_server_error"


class ErrorReason(StrEnum):
    """Server error reasons the adapter knows how to report.

    Legacy FCM reasons first, then the HTTP v1 ``FcmError`` codes and the
    google.rpc status codes not already covered by them.
    """

    MISSING_REGISTRATION = "missing_registration"
    INVALID_REGISTRATION = "invalid_registration"
    NOT_REGISTERED = "not_registered"
    INVALID_PACKAGE_NAME = "invalid_package_name"
    MISMATCH_SENDER_ID = "mismatch_sender_id"
    INVALID_PARAMETERS = "invalid_parameters"
    MESSAGE_TOO_BIG = "message_too_big"
    INVALID_DATA_KEY = "invalid_data_key"
    INVALID_TTL = "invalid_ttl"
    UNAVAILABLE = "unavailable"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    DEVICE_MESSAGE_RATE_EXCEEDED = "device_message_rate_exceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "topics_message_rate_exceeded"
    INVALID_APNS_CREDENTIAL = "invalid_apns_credential"

    UNSPECIFIED_ERROR = "unspecified_error"
    INVALID_ARGUMENT = "invalid_argument"
    UNREGISTERED = "unregistered"
    SENDER_ID_MISMATCH = "sender_id_mismatch"
    QUOTA_EXCEEDED = "quota_exceeded"
    INTERNAL = "internal"
    THIRD_PARTY_AUTH_ERROR = "third_party_auth_error"

    # google.rpc status codes FCM reports when no FcmError detail is sent.
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    UNAUTHENTICATED = "unauthenticated"


ALL_ERROR_REASONS: set[str] = {reason.value for reason in ErrorReason}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def underscore(phrase: str) -> str:
    """Convert a server reason to its lowercase_underscore form.

    >>> underscore("Invalid Registration")
    'invalid_registration'
    >>> underscore("MismatchSenderId")
    'mismatch_sender_id'
    >>> underscore("THIRD_PARTY_AUTH_ERROR")
    'third_party_auth_error'
    """
    split = _CAMEL_BOUNDARY.sub("_", phrase.strip())
    return _SEPARATORS.sub("_", split).strip("_").lower()
