"""Pydantic models describing the DonDominio API payloads."""

from __future__ import annotations

from datetime import UTC, datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_false(value: object) -> object:
    return False if value is None else value


def _scalar_to_text(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, int | float):
        return str(value)
    return value


def _to_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class DonDominioBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApiResponse(DonDominioBaseModel):
    """Envelope shared by every API answer."""

    success: bool
    error_code: int = Field(default=0, alias="errorCode")
    error_message: str = Field(default="", alias="errorCodeMsg")
    action: str | None = None
    version: str | None = None
    response_data: dict[str, Any] = Field(default_factory=dict, alias="responseData")

    @field_validator("response_data", mode="before")
    @classmethod
    def _empty_to_dict(cls, value: object) -> object:
        # An empty responseData is serialised as [] or null.
        if value is None or value == []:
            return {}
        return value

    @field_validator("error_message", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value


class QueryInfo(DonDominioBaseModel):
    page: int = 1
    page_length: int = Field(default=0, alias="pageLength")
    results: int
    total: int


class DomainListEntry(DonDominioBaseModel):
    name: str
    tld: str | None = None
    domain_id: int | None = Field(default=None, alias="domainID")
    status: str | None = None
    expires: str | None = Field(default=None, alias="tsExpir")


class DomainListData(DonDominioBaseModel):
    query_info: QueryInfo = Field(alias="queryInfo")
    domains: list[DomainListEntry] = Field(default_factory=list[DomainListEntry])


class DomainStatusData(DonDominioBaseModel):
    """``infoType=status`` answer of ``domain/getinfo``."""

    name: str | None = None
    status: str | None = None
    created_at: datetime | None = Field(default=None, alias="tsCreate")
    expires_at: datetime = Field(alias="tsExpir")
    authcode_check: bool = Field(default=False, alias="authcodeCheck")
    whois_privacy: bool = Field(default=False, alias="whoisPrivacy")
    transfer_block: bool = Field(default=False, alias="transferBlock")

    _normalize_timestamps = field_validator("created_at", "expires_at", mode="before")(
        _blank_to_none
    )
    _normalize_flags = field_validator(
        "authcode_check", "whois_privacy", "transfer_block", mode="before"
    )(_none_to_false)
    _timestamps_in_utc = field_validator("created_at", "expires_at")(_to_utc)


class NameserverEntry(DonDominioBaseModel):
    order: int | None = None
    name: str = ""
    ipv4: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_hostname(cls, value: object) -> object:
        if isinstance(value, str):
            return {"name": value}
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class NameserversData(DonDominioBaseModel):
    """``infoType=nameservers`` answer; entries keep the registrar's order."""

    name: str | None = None
    nameservers: list[NameserverEntry] = Field(default_factory=list[NameserverEntry])

    @field_validator("nameservers", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class AuthcodeData(DonDominioBaseModel):
    name: str | None = None
    authcode: str


class ContactOwner(DonDominioBaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, str_strip_whitespace=True)

    contact_id: str | None = Field(default=None, alias="contactID")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    org_name: str = Field(default="", alias="orgName")
    email: str = ""
    phone: str = ""
    address: str = ""
    postal_code: str = Field(default="", alias="postalCode")
    city: str = ""
    state: str = ""
    country: str = ""

    _normalize_text = field_validator(
        "first_name",
        "last_name",
        "org_name",
        "email",
        "phone",
        "address",
        "postal_code",
        "city",
        "state",
        "country",
        mode="before",
    )(_scalar_to_text)


class ContactData(DonDominioBaseModel):
    """``infoType=contact`` answer; only the owner contact is used."""

    name: str | None = None
    owner: ContactOwner = Field(alias="contactOwner")
