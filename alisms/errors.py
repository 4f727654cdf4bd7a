"""Error taxonomy for the Aliyun SMS client.

Only local failures are raised as exceptions. Business-level rejections from
the remote API (``Code != "OK"``) are returned as data on the result models;
``ErrorCode`` lets callers switch on the common ones.

Usage::

    from alisms.errors import ErrorCode, TransportError

    try:
        result = await client.send_sms(["13800000000"], "Sign", "SMS_1")
    except TransportError:
        ...  # network failure, nothing was accepted
    if result.error_code is ErrorCode.BUSINESS_LIMIT_CONTROL:
        ...  # throttled by the service
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Common ``Code`` values returned by the SMS API.

    ``OK`` means the call was accepted, not that the message was delivered.
    Codes outside this catalog are still surfaced verbatim on ``result.code``.
    """

    OK = "OK"
    BUSINESS_LIMIT_CONTROL = "isv.BUSINESS_LIMIT_CONTROL"
    MOBILE_NUMBER_ILLEGAL = "isv.MOBILE_NUMBER_ILLEGAL"
    TEMPLATE_MISSING_PARAMETERS = "isv.TEMPLATE_MISSING_PARAMETERS"
    SMS_TEMPLATE_ILLEGAL = "isv.SMS_TEMPLATE_ILLEGAL"
    SMS_SIGNATURE_ILLEGAL = "isv.SMS_SIGNATURE_ILLEGAL"
    AMOUNT_NOT_ENOUGH = "isv.AMOUNT_NOT_ENOUGH"
    INVALID_PARAMETERS = "isv.INVALID_PARAMETERS"
    SYSTEM_ERROR = "isp.SYSTEM_ERROR"
    SIGNATURE_DOES_NOT_MATCH = "SignatureDoesNotMatch"
    SIGNATURE_NONCE_USED = "SignatureNonceUsed"
    TIMESTAMP_EXPIRED = "InvalidTimeStamp.Expired"
    ACCESS_KEY_NOT_FOUND = "InvalidAccessKeyId.NotFound"

    @classmethod
    def lookup(cls, code: str | None) -> ErrorCode | None:
        """Return the catalog member for *code*, or ``None`` if unknown."""
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return None


class AliSMSError(Exception):
    """Base class for all errors raised by this package."""


class TransportError(AliSMSError):
    """The HTTP round trip failed or the body was not JSON.

    Args:
        message: Human-readable description.
        url: Request URL with the signature stripped, when known.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class MalformedResponseError(AliSMSError):
    """A successful response carried records that could not be mapped."""


class ConfigurationError(AliSMSError):
    """Required settings (credentials) are missing."""
