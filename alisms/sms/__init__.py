"""Aliyun SMS API client: request signing, sending, and delivery queries."""

from .client import AliSMSClient, create_client
from .models import Credentials, QueryResult, SendDetail, SendResult, SendStatus
from .signer import canonicalize, percent_encode, sign, signed_query, string_to_sign

__all__ = [
    "AliSMSClient",
    "create_client",
    "Credentials",
    "SendStatus",
    "SendDetail",
    "SendResult",
    "QueryResult",
    "canonicalize",
    "percent_encode",
    "string_to_sign",
    "sign",
    "signed_query",
]
