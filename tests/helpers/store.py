"""In-memory billing store recording every write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ddsync.domain.errors import StoreError
from ddsync.domain.model import split_domain_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from ddsync.domain.model import DomainSnapshot


@dataclass(frozen=True, slots=True)
class RecordedOrder:
    domain_name: str
    expires_at: datetime
    client_id: int


class FakeLocalStore:
    """Dictionary-backed implementation of the local store port."""

    def __init__(
        self,
        *,
        clients: Mapping[int, str] | None = None,
        domains: Iterable[str] = (),
        tlds: Iterable[str] = ("com",),
    ) -> None:
        self.clients: dict[int, str] = dict(clients if clients is not None else {42: ""})
        self.domains: dict[str, int | None] = {name.lower(): None for name in domains}
        self.tlds = {tld.lower() for tld in tlds}
        self.inserted: list[tuple[DomainSnapshot, int]] = []
        self.updated: list[DomainSnapshot] = []
        self.orders: list[RecordedOrder] = []
        self.tld_checks: list[str] = []
        self.failing: set[str] = set()

    @property
    def write_count(self) -> int:
        return len(self.inserted) + len(self.updated) + len(self.orders)

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreError(f"{operation} rejected")

    def find_client_by_id(self, client_id: int) -> bool:
        self._maybe_fail("find_client_by_id")
        return client_id in self.clients

    def find_client_by_email(self, email: str) -> int | None:
        self._maybe_fail("find_client_by_email")
        for client_id, client_email in sorted(self.clients.items()):
            if client_email and client_email == email:
                return client_id
        return None

    def domain_exists(self, name: str) -> bool:
        self._maybe_fail("domain_exists")
        return name.lower() in self.domains

    def tld_configured(self, tld: str) -> bool:
        self._maybe_fail("tld_configured")
        self.tld_checks.append(tld)
        return tld.lower() in self.tlds

    def insert_domain(self, snapshot: DomainSnapshot, client_id: int) -> None:
        self._maybe_fail("insert_domain")
        self.inserted.append((snapshot, client_id))
        self.domains[snapshot.name.lower()] = client_id

    def update_domain(self, snapshot: DomainSnapshot) -> None:
        self._maybe_fail("update_domain")
        self.updated.append(snapshot)

    def insert_order(self, domain_name: str, expires_at: datetime, client_id: int) -> None:
        self._maybe_fail("insert_order")
        sld, _ = split_domain_name(domain_name)
        if not sld:
            raise StoreError(f"Invalid domain {domain_name}")
        self.orders.append(RecordedOrder(domain_name, expires_at, client_id))
