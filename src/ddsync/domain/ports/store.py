"""Port for the local billing database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from ddsync.domain.model import DomainSnapshot


@runtime_checkable
class LocalStore(Protocol):
    """Query/execute contract of the billing database.

    Every method raises ``StoreError`` when the database rejects the operation.
    Each write is its own transaction.
    """

    def find_client_by_id(self, client_id: int) -> bool: ...

    def find_client_by_email(self, email: str) -> int | None: ...

    def domain_exists(self, name: str) -> bool: ...

    def tld_configured(self, tld: str) -> bool: ...

    def insert_domain(self, snapshot: DomainSnapshot, client_id: int) -> None: ...

    def update_domain(self, snapshot: DomainSnapshot) -> None: ...

    def insert_order(self, domain_name: str, expires_at: datetime, client_id: int) -> None: ...


__all__ = ["LocalStore"]
