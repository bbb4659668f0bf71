from __future__ import annotations

from typing import Protocol

from ddsync.app import sync_registrar_domains
from ddsync.domain.reconciliation import SyncOptions
from tests.helpers.registry import FakeRegistryClient
from tests.helpers.store import FakeLocalStore


class MonkeyPatch(Protocol):
    def setattr(self, target: str, value: object) -> None: ...


def test_sync_registrar_domains_runs_reconciler_with_given_ports() -> None:
    registry = FakeRegistryClient(["example.com", "known.com"])
    store = FakeLocalStore(domains=["known.com"])

    report = sync_registrar_domains(
        SyncOptions(default_client_id=42),
        registry=registry,
        store=store,
    )

    assert report.created == 1
    assert report.updated == 1
    assert report.pagination_completed is True


def test_sync_registrar_domains_starts_database_for_default_store(
    monkeypatch: MonkeyPatch,
) -> None:
    startup_calls: list[str | None] = []
    store = FakeLocalStore()

    def fake_startup(*, database_uri: str | None = None) -> None:
        startup_calls.append(database_uri)

    monkeypatch.setattr("ddsync.app.is_started", lambda: False)
    monkeypatch.setattr("ddsync.app.startup", fake_startup)
    monkeypatch.setattr("ddsync.app.SqlAlchemyLocalStore", lambda: store)

    report = sync_registrar_domains(
        SyncOptions(default_client_id=42, dry_run=True),
        registry=FakeRegistryClient(["example.com"]),
        database_uri="sqlite+pysqlite:///:memory:",
    )

    assert startup_calls == ["sqlite+pysqlite:///:memory:"]
    assert report.created == 1
    assert store.write_count == 0
