"""Request signing for the Aliyun RPC API (signature version 1.0).

Signing happens in three steps:

1. ``canonicalize`` sorts the request parameters by key and percent-encodes
   each value into the canonical query string.
2. ``string_to_sign`` prefixes the HTTP method and the encoded path ``/``, and
   percent-encodes the canonical query string a second time.
3. ``sign`` computes ``base64(HMAC-SHA1(secret + "&", string_to_sign))``.

The service recomputes the same value, so every byte matters: encoding uses
the RFC 3986 unreserved alphabet only (space is ``%20``, ``*`` is ``%2A``,
``~`` stays literal), which is what ``urllib.parse.quote`` with an empty
``safe`` set produces.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

SIGNATURE_KEY = "Signature"


def percent_encode(value: str) -> str:
    """Percent-encode *value* as UTF-8, leaving only ``A-Za-z0-9-_.~`` literal."""
    return quote(value, safe="")


def stringify(value: Any) -> str:
    """Coerce a parameter value to the string form the API expects.

    Sequences (e.g. a list of phone numbers) are joined with commas.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Iterable):
        return ",".join(stringify(v) for v in value)
    return str(value)


def canonicalize(params: Mapping[str, Any]) -> str:
    """Build the canonical query string for *params*.

    ``Signature`` and ``None`` values are skipped. Keys are ordered by code
    point, which for the API's ASCII parameter names is byte order.
    """
    pairs = []
    for key in sorted(params):
        if key == SIGNATURE_KEY:
            continue
        value = params[key]
        if value is None:
            continue
        pairs.append(f"{percent_encode(key)}={percent_encode(stringify(value))}")
    return "&".join(pairs)


def string_to_sign(method: str, canonical_query: str) -> str:
    """Return ``METHOD&%2F&<encoded canonical query>``."""
    return f"{method}&{percent_encode('/')}&{percent_encode(canonical_query)}"


def sign(string_to_sign: str, secret: str) -> str:
    """HMAC-SHA1 *string_to_sign* with ``secret + "&"`` and base64 the digest."""
    digest = hmac.new(
        (secret + "&").encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def signed_query(params: Mapping[str, Any], secret: str, method: str = "GET") -> str:
    """Canonical query string with ``Signature`` appended as the last parameter."""
    canonical = canonicalize(params)
    signature = sign(string_to_sign(method, canonical), secret)
    return f"{canonical}&{SIGNATURE_KEY}={percent_encode(signature)}"
