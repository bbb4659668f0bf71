"""Assemble normalised domain snapshots from registrar detail calls."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import BaseModel, ValidationError

from ddsync.adapters.dondominio.schema import (
    AuthcodeData,
    ContactData,
    DomainStatusData,
    NameserversData,
)
from ddsync.domain.errors import DetailFetchError, ExtractionError, RemoteError
from ddsync.domain.model import (
    NAMESERVER_SLOTS,
    DetailAspect,
    DomainSnapshot,
    Nameservers,
    OwnerContact,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ddsync.adapters.dondominio.schema import ContactOwner
    from ddsync.domain.ports.registry import DetailRecord, RegistryClient

log = getLogger(__name__)


def split_phone(phone: str) -> tuple[str, str]:
    """Split a ``+cc.number`` phone into country code and number.

    Only the first dot separates the two parts, so a number that itself carries a
    formatting dot keeps it in the local part. Separator-less phones yield two
    empty strings.
    """

    country_code, separator, number = phone.strip().partition(".")
    if not separator:
        return "", ""
    return country_code, number


def pad_nameservers(hosts: Sequence[str]) -> Nameservers:
    """Fit hostnames into the four nameserver slots, blanking the unused ones."""

    slots = [*hosts[:NAMESERVER_SLOTS]]
    slots.extend("" for _ in range(NAMESERVER_SLOTS - len(slots)))
    return cast("Nameservers", tuple(slots))


def _owner_contact(owner: ContactOwner) -> OwnerContact:
    phone_country_code, phone = split_phone(owner.phone)
    return OwnerContact(
        first_name=owner.first_name,
        last_name=owner.last_name,
        email=owner.email,
        company=owner.org_name,
        address=owner.address,
        city=owner.city,
        state=owner.state,
        postal_code=owner.postal_code,
        country=owner.country,
        phone_country_code=phone_country_code,
        phone=phone,
    )


class FieldExtractor:
    """Build a :class:`DomainSnapshot` from the status, nameserver, authcode and
    contact aspects of a registrar domain.

    The authcode aspect is only requested when the status aspect sets
    ``authcodeCheck``. Any failing call aborts the whole extraction; partial
    snapshots are never returned.
    """

    def __init__(self, registry: RegistryClient) -> None:
        self._registry = registry

    def extract(self, name: str) -> DomainSnapshot:
        status = self._fetch(name, DetailAspect.STATUS, DomainStatusData)
        if status.name and status.name.lower() != name.lower():
            raise ExtractionError(
                f"Status requested for {name} but registrar answered {status.name}"
            )

        nameservers = self._fetch(name, DetailAspect.NAMESERVERS, NameserversData)

        auth_code = ""
        if status.authcode_check:
            auth_code = self._fetch(name, DetailAspect.AUTHCODE, AuthcodeData).authcode

        contact = self._fetch(name, DetailAspect.CONTACT, ContactData)

        return DomainSnapshot(
            name=name,
            registered_at=status.created_at,
            expires_at=status.expires_at,
            nameservers=pad_nameservers([entry.name for entry in nameservers.nameservers]),
            privacy_enabled=status.whois_privacy,
            transfer_locked=status.transfer_block,
            auth_code=auth_code,
            owner=_owner_contact(contact.owner),
        )

    def _fetch[ModelT: BaseModel](
        self,
        name: str,
        aspect: DetailAspect,
        model: type[ModelT],
    ) -> ModelT:
        log.debug("Fetching %s of %s", aspect, name)
        try:
            record: DetailRecord = self._registry.get_domain_detail(name, aspect)
        except RemoteError as exc:
            raise DetailFetchError(str(aspect), code=exc.code) from exc
        try:
            return model.model_validate(dict(record))
        except ValidationError as exc:
            raise ExtractionError(f"Malformed {aspect} data for {name}") from exc
