"""Run report aggregating per-domain outcomes and error entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class OutcomeKind(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class EntryKind(StrEnum):
    ADVISORY = "advisory"
    DOMAIN_ERROR = "domain_error"
    SKIP = "skip"
    RUN_ERROR = "run_error"


SYNC_ONLY_REASON = "sync-only: creation suppressed"
TLD_NOT_CONFIGURED_REASON = "tld not configured"


@dataclass(frozen=True, slots=True)
class ReconciliationOutcome:
    """Result of reconciling one remote domain."""

    domain: str
    kind: OutcomeKind
    reason: str | None = None
    client_id: int | None = None

    @classmethod
    def created(cls, domain: str, *, client_id: int) -> ReconciliationOutcome:
        return cls(domain=domain, kind=OutcomeKind.CREATED, client_id=client_id)

    @classmethod
    def updated(cls, domain: str) -> ReconciliationOutcome:
        return cls(domain=domain, kind=OutcomeKind.UPDATED)

    @classmethod
    def skipped(cls, domain: str, reason: str) -> ReconciliationOutcome:
        return cls(domain=domain, kind=OutcomeKind.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, domain: str, reason: str) -> ReconciliationOutcome:
        return cls(domain=domain, kind=OutcomeKind.FAILED, reason=reason)


@dataclass(frozen=True, slots=True)
class ReportEntry:
    key: str
    message: str
    kind: EntryKind


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Immutable view of a finished run, handed to the presentation layer."""

    created: int
    updated: int
    skipped: int
    failed: int
    observed: int
    pagination_completed: bool
    entries: tuple[ReportEntry, ...]
    outcomes: tuple[ReconciliationOutcome, ...]
    dry_run: bool = False


@dataclass(slots=True)
class RunReport:
    """Collects outcomes and error entries while the reconciler works.

    Entries are deduplicated by key and keep the order in which they were first
    recorded.
    """

    dry_run: bool = False
    pagination_completed: bool = True
    outcomes: list[ReconciliationOutcome] = field(default_factory=list[ReconciliationOutcome])
    _entries: dict[str, ReportEntry] = field(default_factory=dict[str, ReportEntry])

    def record(self, outcome: ReconciliationOutcome) -> None:
        self.outcomes.append(outcome)

    def add_entry(self, key: str, message: str, kind: EntryKind) -> bool:
        """Record an entry unless one with the same key exists; return whether it was added."""

        if key in self._entries:
            return False
        self._entries[key] = ReportEntry(key=key, message=message, kind=kind)
        return True

    def add_advisory(self, key: str, message: str) -> bool:
        return self.add_entry(key, message, EntryKind.ADVISORY)

    def add_domain_error(self, domain: str, message: str) -> bool:
        return self.add_entry(f"domain:{domain}", f"{domain}: {message}", EntryKind.DOMAIN_ERROR)

    def add_run_error(self, key: str, message: str) -> bool:
        return self.add_entry(f"run:{key}", message, EntryKind.RUN_ERROR)

    def abort_pagination(self, message: str) -> None:
        self.pagination_completed = False
        self.add_run_error("pagination", message)

    @property
    def entries(self) -> tuple[ReportEntry, ...]:
        return tuple(self._entries.values())

    @property
    def errors(self) -> list[str]:
        return [entry.message for entry in self._entries.values()]

    def _count(self, kind: OutcomeKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    @property
    def created(self) -> int:
        return self._count(OutcomeKind.CREATED)

    @property
    def updated(self) -> int:
        return self._count(OutcomeKind.UPDATED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeKind.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeKind.FAILED)

    @property
    def domains_observed(self) -> int:
        return len(self.outcomes)

    def outcome_for(self, domain: str) -> ReconciliationOutcome | None:
        for outcome in self.outcomes:
            if outcome.domain == domain:
                return outcome
        return None

    def summary(self) -> RunSummary:
        return RunSummary(
            created=self.created,
            updated=self.updated,
            skipped=self.skipped,
            failed=self.failed,
            observed=self.domains_observed,
            pagination_completed=self.pagination_completed,
            entries=self.entries,
            outcomes=tuple(self.outcomes),
            dry_run=self.dry_run,
        )
