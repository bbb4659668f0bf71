"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ddsync.adapters.dondominio import DonDominioClient
from ddsync.adapters.sqlalchemy import SqlAlchemyLocalStore, is_started, startup
from ddsync.domain.reconciliation import Reconciler, SyncOptions

if TYPE_CHECKING:
    from ddsync.config.dondominio import DonDominioConfig
    from ddsync.domain.ports.registry import RegistryClient
    from ddsync.domain.ports.store import LocalStore
    from ddsync.domain.report import RunReport


log = getLogger(__name__)


def sync_registrar_domains(
    options: SyncOptions,
    *,
    registry: RegistryClient | None = None,
    store: LocalStore | None = None,
    registry_config: DonDominioConfig | None = None,
    database_uri: str | None = None,
) -> RunReport:
    """Reconcile the DonDominio inventory with the billing database."""

    if store is None:
        if not is_started():
            startup(database_uri=database_uri)
        store = SqlAlchemyLocalStore()
    effective_registry = registry or DonDominioClient(config=registry_config)

    log.info(
        "Starting DonDominio sync: default_client=%s, dry_run=%s, sync_only=%s, force_uid=%s",
        options.default_client_id,
        options.dry_run,
        options.sync_only,
        options.force_default_client,
    )

    report = Reconciler(registry=effective_registry, store=store).run(options)

    log.info(
        f"Finished DonDominio sync: observed={report.domains_observed}, "
        f"created={report.created}, updated={report.updated}, skipped={report.skipped}, "
        f"failed={report.failed}, complete={report.pagination_completed}"
    )

    return report
