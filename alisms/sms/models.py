"""Typed request credentials and response models for the SMS API.

The remote API answers in capitalized field names (``RequestId``, ``BizId``,
``SmsSendDetailDTOs``...). The models below expose snake_case attributes and
carry the remote names as validation aliases, so a raw JSON body can be
validated directly.

A ``Code`` of ``"OK"`` only means the API accepted the call. Delivery is
reported later through ``query_send_details``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ErrorCode, MalformedResponseError

OK_CODE = "OK"


@dataclass(frozen=True)
class Credentials:
    """AccessKey pair used to sign requests. The secret never appears in ``repr``."""

    access_key_id: str
    access_key_secret: str = field(repr=False)


class SendStatus(IntEnum):
    """Carrier-reported state of one message."""

    WAITING_RECEIPT = 1
    FAILED = 2
    SUCCEEDED = 3


class SendDetail(BaseModel):
    """One record of ``SmsSendDetailDTOs.SmsSendDetailDTO``.

    ``receive_date`` is empty while the receipt is still pending.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    template_code: str = Field("", alias="TemplateCode")
    receive_date: str = Field("", alias="ReceiveDate")
    phone_num: str = Field("", alias="PhoneNum")
    content: str = Field("", alias="Content")
    send_status: SendStatus = Field(..., alias="SendStatus")
    send_date: str = Field("", alias="SendDate")
    err_code: str = Field("", alias="ErrCode")

    @field_validator(
        "template_code",
        "receive_date",
        "phone_num",
        "content",
        "send_date",
        "err_code",
        mode="before",
    )
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("send_status", mode="before")
    @classmethod
    def coerce_numeric_string(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v


class _Result(BaseModel):
    """Fields shared by every API response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str = Field(..., alias="Code")
    message: str = Field("", alias="Message")
    request_id: str = Field("", alias="RequestId")

    @property
    def ok(self) -> bool:
        """``True`` if the API accepted the call."""
        return self.code == OK_CODE

    @property
    def error_code(self) -> ErrorCode | None:
        return ErrorCode.lookup(self.code)

    @staticmethod
    def _common(body: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "code": str(body.get("Code", "")),
            "message": body.get("Message") or "",
            "request_id": body.get("RequestId") or "",
        }


class SendResult(_Result):
    """Outcome of ``SendSms``. ``biz_id`` is only set when ``ok``."""

    biz_id: str | None = Field(None, alias="BizId")

    @classmethod
    def from_response(cls, body: Mapping[str, Any]) -> SendResult:
        fields = cls._common(body)
        if fields["code"] == OK_CODE:
            fields["biz_id"] = body.get("BizId")
        return cls(**fields)


class QueryResult(_Result):
    """Outcome of ``QuerySendDetails``.

    ``total_count`` and ``details`` are ``None`` unless ``ok``. An accepted
    response without a detail container yields an empty ``details`` list.
    """

    total_count: int | None = Field(None, alias="TotalCount")
    details: list[SendDetail] | None = None

    @classmethod
    def from_response(cls, body: Mapping[str, Any]) -> QueryResult:
        fields = cls._common(body)
        if fields["code"] != OK_CODE:
            return cls(**fields)

        container = body.get("SmsSendDetailDTOs")
        records: Any = []
        if isinstance(container, Mapping):
            records = container.get("SmsSendDetailDTO") or []
        # A single record may come back as an object rather than a list.
        if isinstance(records, Mapping):
            records = [records]

        try:
            details = [SendDetail.model_validate(r) for r in records]
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Cannot map send detail records: {exc.error_count()} error(s)"
            ) from exc

        total = body.get("TotalCount")
        try:
            fields["total_count"] = int(total) if total is not None else None
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Invalid TotalCount: {total!r}") from exc
        fields["details"] = details
        return cls(**fields)
