"""In-memory registrar used by the reconciliation tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ddsync.domain.errors import RemoteError
from ddsync.domain.model import DetailAspect, DomainListPage, ListedDomain

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ddsync.domain.ports.registry import DetailRecord


def make_domain_details(
    name: str,
    *,
    expires: str = "2026-03-01 00:00:00",
    created: str = "2020-03-01 00:00:00",
    nameservers: Sequence[str] = ("ns1.example.net", "ns2.example.net"),
    authcode: str | None = "AUTH-123",
    privacy: bool = False,
    transfer_block: bool = True,
    email: str = "owner@example.org",
    phone: str = "+34.933000000",
) -> dict[DetailAspect, dict[str, Any]]:
    """Build the four detail payloads the registrar returns for ``name``."""

    return {
        DetailAspect.STATUS: {
            "name": name,
            "status": "active",
            "tsCreate": created,
            "tsExpir": expires,
            "authcodeCheck": authcode is not None,
            "whoisPrivacy": privacy,
            "transferBlock": transfer_block,
        },
        DetailAspect.NAMESERVERS: {
            "name": name,
            "nameservers": [
                {"order": index, "name": host, "ipv4": ""}
                for index, host in enumerate(nameservers, start=1)
            ],
        },
        DetailAspect.AUTHCODE: {"name": name, "authcode": authcode},
        DetailAspect.CONTACT: {
            "name": name,
            "contactOwner": {
                "contactID": "ES-OWNER-1",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "orgName": "Analytical Engines SL",
                "email": email,
                "phone": phone,
                "address": "Carrer Major 1",
                "postalCode": "08001",
                "city": "Barcelona",
                "state": "Barcelona",
                "country": "ES",
            },
        },
    }


class FakeRegistryClient:
    """Serves a fixed domain list in pages of ``page_length`` and records every call."""

    def __init__(
        self,
        domains: Iterable[str] = (),
        *,
        page_length: int = 1000,
        total: int | None = None,
        details: dict[str, dict[DetailAspect, dict[str, Any]]] | None = None,
    ) -> None:
        self.domains = list(domains)
        self.page_length = page_length
        self.total = len(self.domains) if total is None else total
        self.details = dict(details or {})
        self.list_calls: list[int] = []
        self.detail_calls: list[tuple[str, DetailAspect]] = []
        self.failing_pages: dict[int, RemoteError] = {}
        self.failing_aspects: dict[tuple[str, DetailAspect], RemoteError] = {}

    def fail_page(self, page: int, message: str = "Service unavailable") -> None:
        self.failing_pages[page] = RemoteError(message, code=503)

    def fail_aspect(self, name: str, aspect: DetailAspect, message: str = "Timeout") -> None:
        self.failing_aspects[(name, aspect)] = RemoteError(message)

    def list_domains(self, page: int) -> DomainListPage:
        self.list_calls.append(page)
        if page in self.failing_pages:
            raise self.failing_pages[page]
        start = (page - 1) * self.page_length
        chunk = self.domains[start : start + self.page_length]
        return DomainListPage(
            records=tuple(ListedDomain(name=name) for name in chunk),
            results=len(chunk),
            total=self.total,
        )

    def get_domain_detail(self, name: str, aspect: DetailAspect) -> DetailRecord:
        self.detail_calls.append((name, aspect))
        if (name, aspect) in self.failing_aspects:
            raise self.failing_aspects[(name, aspect)]
        details = self.details.get(name) or make_domain_details(name)
        return details[aspect]

    def aspects_fetched(self, name: str) -> list[DetailAspect]:
        return [aspect for called, aspect in self.detail_calls if called == name]
