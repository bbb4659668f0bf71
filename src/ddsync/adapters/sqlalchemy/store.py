"""Local store implementation over the BoxBilling tables."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from ddsync.adapters.sqlalchemy.mappings import (
    client_order_table,
    client_table,
    service_domain_table,
    tld_registrar_table,
    tld_table,
)
from ddsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
from ddsync.config.storage import StoreConfig, get_store_config
from ddsync.domain.errors import StoreError
from ddsync.domain.model import split_domain_name

if TYPE_CHECKING:
    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session

    from ddsync.domain.model import DomainSnapshot

type UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]
type Clock = Callable[[], datetime]

log = getLogger(__name__)

ORDER_PRODUCT_ID: Final[int] = 1
ORDER_PERIOD: Final[str] = "1Y"
ORDER_UNIT: Final[str] = "year"
ORDER_STATUS: Final[str] = "active"
SERVICE_TYPE: Final[str] = "domain"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _stored_tld(tld: str) -> str:
    return "." + tld.strip().lstrip(".").lower()


def build_order_config(domain_name: str) -> dict[str, Any]:
    """Describe a one-year register action the way BoxBilling stores it on orders."""

    sld, tld = split_domain_name(domain_name)
    title = f"Domain {domain_name} imported"
    return {
        "register_sld": sld,
        "register_tld": _stored_tld(tld),
        "register_years": 1,
        "ns1": "",
        "ns2": "",
        "ns3": "",
        "ns4": "",
        "transfer_sld": "",
        "transfer_tld": _stored_tld(tld),
        "transfer_code": "",
        "action": "register",
        "multiple": 1,
        "period": ORDER_PERIOD,
        "quantity": 1,
        "id": 0,
        "product_id": ORDER_PRODUCT_ID,
        "form_id": None,
        "title": title,
        "type": SERVICE_TYPE,
        "unit": ORDER_UNIT,
        "price": "0.00",
        "setup_price": 0,
        "discount": 0,
        "discount_price": 0,
        "discount_setup": 0,
        "total": 0,
    }


def _snapshot_columns(snapshot: DomainSnapshot) -> dict[str, Any]:
    owner = snapshot.owner
    ns1, ns2, ns3, ns4 = snapshot.nameservers
    return {
        "ns1": ns1,
        "ns2": ns2,
        "ns3": ns3,
        "ns4": ns4,
        "privacy": int(snapshot.privacy_enabled),
        "locked": int(snapshot.transfer_locked),
        "transfer_code": snapshot.auth_code,
        "contact_email": owner.email,
        "contact_company": owner.company,
        "contact_first_name": owner.first_name,
        "contact_last_name": owner.last_name,
        "contact_address1": owner.address,
        "contact_city": owner.city,
        "contact_state": owner.state,
        "contact_postcode": owner.postal_code,
        "contact_country": owner.country,
        "contact_phone_cc": owner.phone_country_code,
        "contact_phone": owner.phone,
        "expires_at": snapshot.expires_at,
    }


class SqlAlchemyLocalStore:
    """Read and write registrar domains in the billing database.

    Every public method runs in its own unit of work, so a failure never leaves
    a half-written row behind and never spills into the next call. SQLAlchemy
    errors surface as ``StoreError``.
    """

    def __init__(
        self,
        *,
        config: StoreConfig | None = None,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or get_store_config()
        self._unit_of_work_factory = unit_of_work_factory or SqlAlchemyUnitOfWork
        self._clock = clock or _utcnow

    @contextmanager
    def _transaction(self, failure: str) -> Iterator[Session]:
        try:
            with self._unit_of_work_factory() as uow:
                yield uow.session
                uow.commit()
        except SQLAlchemyError as exc:
            log.debug("%s: %s", failure, exc)
            raise StoreError(failure) from exc

    def find_client_by_id(self, client_id: int) -> bool:
        stmt = select(client_table.c.id).where(client_table.c.id == client_id)
        with self._transaction(f"Error looking up client {client_id}") as session:
            return session.execute(stmt).first() is not None

    def find_client_by_email(self, email: str) -> int | None:
        stmt = (
            select(client_table.c.id)
            .where(client_table.c.email == email)
            .order_by(client_table.c.id)
            .limit(1)
        )
        with self._transaction("Error looking up client by email") as session:
            return session.execute(stmt).scalar_one_or_none()

    def domain_exists(self, name: str) -> bool:
        sld, tld = split_domain_name(name)
        stmt = (
            select(service_domain_table.c.id)
            .where(service_domain_table.c.sld == sld)
            .where(service_domain_table.c.tld == _stored_tld(tld))
            .limit(1)
        )
        with self._transaction(f"Error looking up domain {name}") as session:
            return session.execute(stmt).first() is not None

    def tld_configured(self, tld: str) -> bool:
        stmt = (
            select(tld_table.c.id)
            .join(tld_registrar_table, tld_table.c.tld_registrar_id == tld_registrar_table.c.id)
            .where(tld_table.c.tld == _stored_tld(tld))
            .where(tld_registrar_table.c.name == self._config.registrar_name)
            .limit(1)
        )
        with self._transaction(f"Error looking up TLD .{tld}") as session:
            return session.execute(stmt).first() is not None

    def insert_domain(self, snapshot: DomainSnapshot, client_id: int) -> None:
        now = self._clock()
        with self._transaction("Error creating domain") as session:
            registrar_id = session.execute(
                select(tld_registrar_table.c.id)
                .where(tld_registrar_table.c.name == self._config.registrar_name)
                .limit(1)
            ).scalar_one_or_none()
            if registrar_id is None:
                raise StoreError(f"Registrar {self._config.registrar_name} is not configured")
            session.execute(
                insert(service_domain_table).values(
                    client_id=client_id,
                    tld_registrar_id=registrar_id,
                    sld=snapshot.sld,
                    tld=_stored_tld(snapshot.tld),
                    period=1,
                    registered_at=snapshot.registered_at,
                    created_at=now,
                    updated_at=now,
                    **_snapshot_columns(snapshot),
                )
            )
        log.debug("Inserted domain %s for client %s", snapshot.name, client_id)

    def update_domain(self, snapshot: DomainSnapshot) -> None:
        stmt = (
            update(service_domain_table)
            .where(service_domain_table.c.sld == snapshot.sld)
            .where(service_domain_table.c.tld == _stored_tld(snapshot.tld))
            .values(updated_at=self._clock(), **_snapshot_columns(snapshot))
        )
        with self._transaction("Error updating domain") as session:
            result = cast("CursorResult[Any]", session.execute(stmt))
            if result.rowcount == 0:
                raise StoreError(f"Domain {snapshot.name} disappeared before it could be updated")
        log.debug("Updated domain %s", snapshot.name)

    def insert_order(self, domain_name: str, expires_at: datetime, client_id: int) -> None:
        sld, tld = split_domain_name(domain_name)
        config = build_order_config(domain_name)
        now = self._clock()
        with self._transaction("Error creating order") as session:
            service_id = session.execute(
                select(service_domain_table.c.id)
                .where(service_domain_table.c.sld == sld)
                .where(service_domain_table.c.tld == _stored_tld(tld))
                .order_by(service_domain_table.c.id.desc())
                .limit(1)
            ).scalar_one_or_none()
            if service_id is None:
                raise StoreError(f"Domain {domain_name} has no service row to attach an order to")
            session.execute(
                insert(client_order_table).values(
                    client_id=client_id,
                    product_id=ORDER_PRODUCT_ID,
                    group_id=None,
                    group_master=True,
                    invoice_option=None,
                    title=config["title"],
                    currency=self._config.currency,
                    service_id=service_id,
                    service_type=SERVICE_TYPE,
                    period=ORDER_PERIOD,
                    quantity=1,
                    unit=ORDER_UNIT,
                    price=0,
                    discount=0,
                    status=ORDER_STATUS,
                    config=json.dumps(config),
                    expires_at=expires_at,
                    activated_at=now,
                    created_at=now,
                    updated_at=now,
                )
            )
        log.debug("Inserted order for %s", domain_name)


if TYPE_CHECKING:
    from ddsync.domain.ports.store import LocalStore

    _store_check: LocalStore = SqlAlchemyLocalStore()
