"""Registrar-to-billing reconciliation domain."""

from __future__ import annotations

from .errors import (
    ConfigurationGap,
    DetailFetchError,
    ExtractionError,
    RemoteError,
    StoreError,
    SyncError,
    UnknownClientError,
)
from .extraction import FieldExtractor
from .model import (
    DetailAspect,
    DomainListPage,
    DomainSnapshot,
    ListedDomain,
    OwnerContact,
)
from .reconciliation import Reconciler, SyncOptions
from .report import (
    EntryKind,
    OutcomeKind,
    ReconciliationOutcome,
    ReportEntry,
    RunReport,
    RunSummary,
)

__all__ = [
    "ConfigurationGap",
    "DetailAspect",
    "DetailFetchError",
    "DomainListPage",
    "DomainSnapshot",
    "EntryKind",
    "ExtractionError",
    "FieldExtractor",
    "ListedDomain",
    "OutcomeKind",
    "OwnerContact",
    "Reconciler",
    "ReconciliationOutcome",
    "RemoteError",
    "ReportEntry",
    "RunReport",
    "RunSummary",
    "StoreError",
    "SyncError",
    "SyncOptions",
    "UnknownClientError",
]
