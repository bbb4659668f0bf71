"""Reconcile a registrar's domain inventory with the local billing database.

The :class:`Reconciler` pages through the registrar listing, then resolves each
domain strictly one after another:

* domains already known locally are refreshed from a fresh snapshot,
* unknown domains are created (unless ``sync_only`` is set or their TLD is not
  configured for the registrar) together with a placeholder billing order.

Per-domain problems become outcomes in the :class:`RunReport`; only a failing
listing page stops the run early, and even then the domains already listed are
processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ddsync.domain.errors import (
    ConfigurationGap,
    ExtractionError,
    RemoteError,
    StoreError,
    UnknownClientError,
)
from ddsync.domain.extraction import FieldExtractor
from ddsync.domain.report import (
    SYNC_ONLY_REASON,
    TLD_NOT_CONFIGURED_REASON,
    EntryKind,
    ReconciliationOutcome,
    RunReport,
)

if TYPE_CHECKING:
    from ddsync.domain.model import DomainSnapshot, ListedDomain
    from ddsync.domain.ports.registry import RegistryClient
    from ddsync.domain.ports.store import LocalStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncOptions:
    """Inputs of a single reconciliation run."""

    default_client_id: int
    dry_run: bool = False
    sync_only: bool = False
    force_default_client: bool = False


class Reconciler:
    def __init__(
        self,
        *,
        registry: RegistryClient,
        store: LocalStore,
        extractor: FieldExtractor | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._extractor = extractor or FieldExtractor(registry)

    def run(self, options: SyncOptions) -> RunReport:
        """Reconcile every listed domain and return the accumulated report.

        Raises ``UnknownClientError`` before any registrar call when the default
        client does not exist.
        """

        if not self._store.find_client_by_id(options.default_client_id):
            raise UnknownClientError(options.default_client_id)

        report = RunReport(dry_run=options.dry_run)
        if options.dry_run:
            log.info("Dry run: no changes will be written to the database")

        listing = self.collect_listing(report)
        log.info("Reconciling %s domains", len(listing))

        for listed in listing:
            outcome = self._reconcile(listed, options, report)
            report.record(outcome)
            log.info("%-30s %s", outcome.domain, outcome.reason or outcome.kind)

        log.info(
            "Sync finished: created=%s, updated=%s, skipped=%s, failed=%s",
            report.created,
            report.updated,
            report.skipped,
            report.failed,
        )
        return report

    def collect_listing(self, report: RunReport) -> list[ListedDomain]:
        """Page through the registrar listing until the reported total is reached."""

        listing: list[ListedDomain] = []
        seen: set[str] = set()
        received = 0
        page = 1

        while True:
            try:
                result = self._registry.list_domains(page)
            except RemoteError as exc:
                log.error("Listing page %s failed: %s", page, exc)  # noqa: TRY400
                report.abort_pagination(
                    f"There was an error fetching the domain list (page {page}): {exc}"
                )
                break

            received += len(result.records)
            for record in result.records:
                key = record.name.lower()
                if key in seen:
                    log.debug("Dropping duplicate listing entry %s", record.name)
                    continue
                seen.add(key)
                listing.append(record)

            log.debug("Listed page %s: %s/%s domains", page, received, result.total)
            if received >= result.total:
                break
            if not result.records:
                report.abort_pagination(
                    f"Domain list ended at page {page} after {received} of "
                    f"{result.total} domains"
                )
                break
            page += 1

        return listing

    def _reconcile(
        self,
        listed: ListedDomain,
        options: SyncOptions,
        report: RunReport,
    ) -> ReconciliationOutcome:
        name = listed.name
        try:
            if self._store.domain_exists(name):
                return self._update(name, options, report)
            if options.sync_only:
                report.add_entry(f"skip:{name}", f"{name}: {SYNC_ONLY_REASON}", EntryKind.SKIP)
                return ReconciliationOutcome.skipped(name, SYNC_ONLY_REASON)
            self._require_tld(listed.tld)
            return self._create(name, options, report)
        except ConfigurationGap as gap:
            report.add_advisory(gap.key, gap.message)
            return ReconciliationOutcome.skipped(name, TLD_NOT_CONFIGURED_REASON)
        except StoreError as exc:
            return self._fail(name, exc, report)

    def _require_tld(self, tld: str) -> None:
        if not self._store.tld_configured(tld):
            raise ConfigurationGap(
                f"tld:{tld}",
                f'You need to configure the ".{tld}" TLD in the billing system '
                f"to sync .{tld} domains.",
            )

    def _update(
        self,
        name: str,
        options: SyncOptions,
        report: RunReport,
    ) -> ReconciliationOutcome:
        try:
            snapshot = self._extractor.extract(name)
        except (RemoteError, ExtractionError) as exc:
            return self._fail(name, exc, report)

        if not options.dry_run:
            try:
                self._store.update_domain(snapshot)
            except StoreError as exc:
                return self._fail(name, exc, report)

        return ReconciliationOutcome.updated(name)

    def _create(
        self,
        name: str,
        options: SyncOptions,
        report: RunReport,
    ) -> ReconciliationOutcome:
        try:
            snapshot = self._extractor.extract(name)
        except (RemoteError, ExtractionError) as exc:
            return self._fail(name, exc, report)

        client_id = self._resolve_owner(snapshot, options)

        if not options.dry_run:
            try:
                self._store.insert_domain(snapshot, client_id)
            except StoreError as exc:
                return self._fail(name, exc, report)
            try:
                self._store.insert_order(name, snapshot.expires_at, client_id)
            except StoreError as exc:
                log.warning("Order for %s could not be created: %s", name, exc)
                report.add_advisory(
                    f"order:{name}",
                    f"{name}: domain created but its billing order failed ({exc})",
                )

        return ReconciliationOutcome.created(name, client_id=client_id)

    def _resolve_owner(self, snapshot: DomainSnapshot, options: SyncOptions) -> int:
        if options.force_default_client:
            return options.default_client_id
        email = snapshot.owner.email
        if not email:
            return options.default_client_id
        owner_id = self._store.find_client_by_email(email)
        if owner_id is None:
            log.debug("No client with email %s, using default client", email)
            return options.default_client_id
        return owner_id

    @staticmethod
    def _fail(name: str, exc: Exception, report: RunReport) -> ReconciliationOutcome:
        reason = str(exc)
        detail = f"{reason} ({exc.__cause__})" if exc.__cause__ is not None else reason
        log.warning("%s failed: %s", name, detail)
        report.add_domain_error(name, detail)
        return ReconciliationOutcome.failed(name, reason)
