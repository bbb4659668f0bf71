"""SQLAlchemy adapter package for the BoxBilling database."""

from __future__ import annotations

from .mappings import (
    client_order_table,
    client_table,
    create_all_tables,
    metadata,
    service_domain_table,
    tld_registrar_table,
    tld_table,
)
from .store import SqlAlchemyLocalStore, build_order_config
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyLocalStore",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "build_order_config",
    "client_order_table",
    "client_table",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "service_domain_table",
    "tld_registrar_table",
    "tld_table",
    "shutdown",
    "startup",
]
