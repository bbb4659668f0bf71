"""SQLAlchemy table metadata for the subset of the BoxBilling schema ddsync touches."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    TypeDecorator,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    """Store datetimes as naive UTC, the way BoxBilling keeps its timestamps."""

    impl = DateTime()
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


client_table = Table(
    "client",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), index=True),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("created_at", UTCDateTime()),
    Column("updated_at", UTCDateTime()),
)

tld_registrar_table = Table(
    "tld_registrar",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255)),
    Column("registrar", String(255)),
)

tld_table = Table(
    "tld",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tld_registrar_id", Integer, ForeignKey("tld_registrar.id")),
    Column("tld", String(15), unique=True),
    Column("active", Boolean, default=True),
)

service_domain_table = Table(
    "service_domain",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("client_id", Integer, ForeignKey("client.id")),
    Column("tld_registrar_id", Integer, ForeignKey("tld_registrar.id")),
    Column("sld", String(255)),
    Column("tld", String(100)),
    Column("ns1", String(255)),
    Column("ns2", String(255)),
    Column("ns3", String(255)),
    Column("ns4", String(255)),
    Column("period", Integer),
    Column("privacy", Integer),
    Column("locked", Integer, default=1),
    Column("transfer_code", String(255)),
    Column("action", String(30)),
    Column("contact_email", String(255)),
    Column("contact_company", String(255)),
    Column("contact_first_name", String(255)),
    Column("contact_last_name", String(255)),
    Column("contact_address1", String(255)),
    Column("contact_address2", String(255)),
    Column("contact_city", String(255)),
    Column("contact_state", String(255)),
    Column("contact_postcode", String(255)),
    Column("contact_country", String(255)),
    Column("contact_phone_cc", String(255)),
    Column("contact_phone", String(255)),
    Column("details", Text),
    Column("synced_at", UTCDateTime()),
    Column("registered_at", UTCDateTime()),
    Column("expires_at", UTCDateTime()),
    Column("created_at", UTCDateTime()),
    Column("updated_at", UTCDateTime()),
)

client_order_table = Table(
    "client_order",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("client_id", Integer, ForeignKey("client.id")),
    Column("product_id", Integer),
    Column("form_id", Integer),
    Column("promo_id", Integer),
    Column("group_id", String(255)),
    Column("group_master", Boolean, default=False),
    Column("invoice_option", String(255)),
    Column("title", String(255)),
    Column("currency", String(20)),
    Column("unpaid_invoice_id", Integer),
    Column("service_id", Integer),
    Column("service_type", String(100)),
    Column("period", String(20)),
    Column("quantity", Integer, default=1),
    Column("unit", String(100)),
    Column("price", Numeric(18, 2)),
    Column("discount", Numeric(18, 2)),
    Column("status", String(50)),
    Column("reason", String(255)),
    Column("notes", Text),
    Column("config", Text),
    Column("referred_by", String(255)),
    Column("expires_at", UTCDateTime()),
    Column("activated_at", UTCDateTime()),
    Column("suspended_at", UTCDateTime()),
    Column("unsuspended_at", UTCDateTime()),
    Column("canceled_at", UTCDateTime()),
    Column("created_at", UTCDateTime()),
    Column("updated_at", UTCDateTime()),
)


def create_all_tables(engine: Engine) -> None:
    """Create the billing tables (only meant for SQLite development databases and tests)."""

    log.info("Creating all tables")
    metadata.create_all(engine)
