"""Value objects describing registrar domains during a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

NAMESERVER_SLOTS = 4

type Nameservers = tuple[str, str, str, str]


class DetailAspect(StrEnum):
    """The ``infoType`` values accepted by the registrar's domain detail call."""

    STATUS = "status"
    NAMESERVERS = "nameservers"
    AUTHCODE = "authcode"
    CONTACT = "contact"


def split_domain_name(name: str) -> tuple[str, str]:
    """Split ``sld.tld`` on the first dot; a name without a dot has an empty tld."""

    sld, _, tld = name.strip().lower().partition(".")
    return sld, tld


@dataclass(frozen=True, slots=True)
class ListedDomain:
    """One entry of the registrar's paginated domain listing."""

    name: str
    listed_tld: str | None = None

    @property
    def tld(self) -> str:
        if self.listed_tld:
            return self.listed_tld.strip().lstrip(".").lower()
        return split_domain_name(self.name)[1]


@dataclass(frozen=True, slots=True)
class DomainListPage:
    """A single page of the registrar listing together with its paging counters."""

    records: tuple[ListedDomain, ...]
    results: int
    total: int


@dataclass(frozen=True, slots=True)
class OwnerContact:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    phone_country_code: str = ""
    phone: str = ""


@dataclass(frozen=True, slots=True)
class DomainSnapshot:
    """Normalised, point-in-time facts about one registrar domain."""

    name: str
    expires_at: datetime
    registered_at: datetime | None = None
    nameservers: Nameservers = ("", "", "", "")
    privacy_enabled: bool = False
    transfer_locked: bool = False
    auth_code: str = ""
    owner: OwnerContact = field(default_factory=OwnerContact)

    def __post_init__(self) -> None:
        if len(self.nameservers) != NAMESERVER_SLOTS:
            raise ValueError(
                f"Snapshot requires exactly {NAMESERVER_SLOTS} nameserver slots, "
                f"got {len(self.nameservers)}"
            )

    @property
    def sld(self) -> str:
        return split_domain_name(self.name)[0]

    @property
    def tld(self) -> str:
        return split_domain_name(self.name)[1]
