"""Aliyun SMS client using raw HTTP via httpx.

Sends messages and queries delivery details through the Dysmsapi RPC API
(version ``2017-05-25``). Every call builds a fresh parameter set with its own
timestamp and nonce, signs it (see ``signer``), and issues a single GET.

No Aliyun SDK dependency -- uses httpx.AsyncClient for direct API calls.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..errors import ConfigurationError, TransportError
from .models import Credentials, QueryResult, SendResult
from .signer import signed_query

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://dysmsapi.aliyuncs.com"
API_VERSION = "2017-05-25"
RESPONSE_FORMAT = "JSON"
SIGNATURE_METHOD = "HMAC-SHA1"
SIGNATURE_VERSION = "1.0"
HTTP_METHOD = "GET"

ACTION_SEND_SMS = "SendSms"
ACTION_QUERY_SEND_DETAILS = "QuerySendDetails"


def _mask(phone: str) -> str:
    return phone[-4:] if phone else "????"


class AliSMSClient:
    """Async client for the Aliyun SMS API.

    Safe to share between concurrent tasks: credentials are read-only and each
    call builds its own parameters.

    Args:
        access_key_id: AccessKey ID.
        access_key_secret: AccessKey secret, used only for signing.
        endpoint: Override for testing or regional endpoints.
        http_client: Injected transport; the caller keeps ownership of it.
        timeout: Per-request timeout in seconds for the owned client.
    """

    def __init__(
        self,
        access_key_id: str,
        access_key_secret: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._credentials = Credentials(access_key_id, access_key_secret)
        self._endpoint = endpoint.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = http_client is None

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def close(self) -> None:
        """Close the underlying HTTP client if we own it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> AliSMSClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- Public API ----------------------------------------------------------

    async def send_sms(
        self,
        phone_numbers: str | Sequence[str],
        sign_name: str,
        template_code: str,
        template_param: str | Mapping[str, Any] | None = None,
        *,
        out_id: str | None = None,
        sms_up_extend_code: str | None = None,
    ) -> SendResult:
        """Send a templated message to one or more phone numbers.

        Args:
            phone_numbers: A number, or a sequence of numbers sent as one
                comma-joined ``PhoneNumbers`` value.
            sign_name: Approved signature name shown to recipients.
            template_code: Approved template ID, e.g. ``SMS_8170249``.
            template_param: Template variables as a JSON string or a mapping.
            out_id: Caller reference echoed back in delivery receipts.
            sms_up_extend_code: Uplink extension code.

        Returns:
            ``SendResult``. Check ``result.ok``: a rejected call is returned,
            not raised. ``biz_id`` is set only when the call was accepted.

        Raises:
            ValueError: If no phone number is given.
            TransportError: On network failure or a non-JSON response.
        """
        if isinstance(phone_numbers, str):
            phone_numbers = [phone_numbers]
        numbers = [p for p in phone_numbers if p]
        if not numbers:
            raise ValueError("phone_numbers must contain at least one number")

        if isinstance(template_param, Mapping):
            template_param = json.dumps(template_param, ensure_ascii=False)

        params = self.build_params(
            ACTION_SEND_SMS,
            PhoneNumbers=numbers,
            SignName=sign_name,
            TemplateCode=template_code,
            TemplateParam=template_param or None,
            OutId=out_id,
            SmsUpExtendCode=sms_up_extend_code,
        )

        logger.info(
            "Sending SMS template=%s recipients=%d last4=%s",
            template_code,
            len(numbers),
            ",".join(_mask(p) for p in numbers[:5]),
        )
        body = await self._request(params)
        result = SendResult.from_response(body)
        if not result.ok:
            logger.warning(
                "SendSms rejected code=%s message=%s request_id=%s",
                result.code,
                result.message,
                result.request_id,
            )
        else:
            logger.info("SMS accepted biz_id=%s request_id=%s", result.biz_id, result.request_id)
        return result

    async def query_send_details(
        self,
        phone_number: str,
        send_date: str | date,
        page_size: int,
        current_page: int,
        biz_id: str | None = None,
    ) -> QueryResult:
        """Query per-recipient delivery records for one number and day.

        Args:
            phone_number: Recipient number.
            send_date: Day the message was sent, ``YYYYMMDD`` or a ``date``.
            page_size: Records per page.
            current_page: 1-based page number.
            biz_id: Receipt ID from ``send_sms`` to narrow the query.

        Returns:
            ``QueryResult`` with ``details`` in the order the service returned
            them. ``total_count`` and ``details`` are ``None`` on rejection.

        Raises:
            TransportError: On network failure or a non-JSON response.
            MalformedResponseError: If an accepted response has unmappable records.
        """
        if isinstance(send_date, date):
            send_date = send_date.strftime("%Y%m%d")

        params = self.build_params(
            ACTION_QUERY_SEND_DETAILS,
            PhoneNumber=phone_number,
            SendDate=send_date,
            PageSize=page_size,
            CurrentPage=current_page,
            BizId=biz_id or None,
        )

        logger.info(
            "Querying SMS details last4=%s date=%s page=%d",
            _mask(phone_number),
            send_date,
            current_page,
        )
        body = await self._request(params)
        result = QueryResult.from_response(body)
        if not result.ok:
            logger.warning(
                "QuerySendDetails rejected code=%s message=%s request_id=%s",
                result.code,
                result.message,
                result.request_id,
            )
        return result

    # -- Request construction ------------------------------------------------

    def build_params(self, action: str, **extra: Any) -> dict[str, Any]:
        """Common request parameters for *action* plus the non-``None`` *extra* ones."""
        params: dict[str, Any] = {
            "AccessKeyId": self._credentials.access_key_id,
            "Action": action,
            "Format": RESPONSE_FORMAT,
            "Version": API_VERSION,
            "Timestamp": self.timestamp(),
            "SignatureNonce": self.nonce(),
            "SignatureMethod": SIGNATURE_METHOD,
            "SignatureVersion": SIGNATURE_VERSION,
        }
        params.update({k: v for k, v in extra.items() if v is not None})
        return params

    def build_url(self, params: Mapping[str, Any]) -> str:
        """Endpoint URL with the canonical query and ``Signature`` last."""
        query = signed_query(params, self._credentials.access_key_secret, HTTP_METHOD)
        return f"{self._endpoint}/?{query}"

    @staticmethod
    def nonce() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def timestamp() -> str:
        """Current UTC time in ISO 8601 with second precision."""
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    async def _request(self, params: Mapping[str, Any]) -> dict[str, Any]:
        url = self.build_url(params)
        action = params.get("Action")
        try:
            response = await self._client.get(
                url, headers={"Content-Type": "application/json"}
            )
        except httpx.HTTPError as exc:
            logger.error("SMS API request failed action=%s error=%s", action, exc)
            raise TransportError(
                f"{action} request failed: {exc}", url=self._endpoint
            ) from exc

        # Business errors arrive with 4xx statuses and a JSON body, so the
        # status code alone is not a failure.
        try:
            body = response.json()
        except ValueError as exc:
            logger.error(
                "SMS API returned non-JSON body action=%s status=%d",
                action,
                response.status_code,
            )
            raise TransportError(
                f"{action} returned a non-JSON body (HTTP {response.status_code})",
                url=self._endpoint,
            ) from exc
        if not isinstance(body, dict):
            raise TransportError(
                f"{action} returned unexpected JSON of type {type(body).__name__}",
                url=self._endpoint,
            )
        return body


def create_client(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AliSMSClient:
    """Build an ``AliSMSClient`` from environment settings.

    Raises:
        ConfigurationError: If the AccessKey ID or secret is not set.
    """
    settings = settings or get_settings()
    if not settings.has_credentials:
        raise ConfigurationError(
            "ALISMS_ACCESS_KEY_ID and ALISMS_ACCESS_KEY_SECRET must be set"
        )
    return AliSMSClient(
        settings.ALISMS_ACCESS_KEY_ID,
        settings.ALISMS_ACCESS_KEY_SECRET.get_secret_value(),
        endpoint=settings.ALISMS_ENDPOINT,
        http_client=http_client,
        timeout=settings.ALISMS_TIMEOUT,
    )
