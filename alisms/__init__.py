"""Async client for the Aliyun (Alibaba Cloud) Short Message Service.

Provides HMAC-SHA1 request signing, message sending, and delivery-detail
queries over httpx, with typed pydantic results.
"""

from .errors import (
    AliSMSError,
    ConfigurationError,
    ErrorCode,
    MalformedResponseError,
    TransportError,
)
from .sms import (
    AliSMSClient,
    Credentials,
    QueryResult,
    SendDetail,
    SendResult,
    SendStatus,
    canonicalize,
    create_client,
    sign,
    string_to_sign,
)

__version__ = "0.1.0"

__all__ = [
    "AliSMSClient",
    "create_client",
    "Credentials",
    "SendStatus",
    "SendDetail",
    "SendResult",
    "QueryResult",
    "canonicalize",
    "string_to_sign",
    "sign",
    "ErrorCode",
    "AliSMSError",
    "TransportError",
    "MalformedResponseError",
    "ConfigurationError",
]
