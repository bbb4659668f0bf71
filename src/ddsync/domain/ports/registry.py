"""Port for reading the domain inventory of a registrar account."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ddsync.domain.model import DetailAspect, DomainListPage

type DetailRecord = Mapping[str, object]


@runtime_checkable
class RegistryClient(Protocol):
    """Blocking client for the registrar API.

    Both calls raise ``RemoteError`` on transport or API-level failures.
    """

    def list_domains(self, page: int) -> DomainListPage: ...

    def get_domain_detail(self, name: str, aspect: DetailAspect) -> DetailRecord: ...


__all__ = ["DetailRecord", "RegistryClient"]
