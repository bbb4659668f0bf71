"""Error taxonomy for the synchronisation engine."""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for errors raised while reconciling registrar domains."""


class RemoteError(SyncError):
    """Raised when the registrar API or its transport fails."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class DetailFetchError(RemoteError):
    """Raised when one detail aspect of a domain could not be fetched."""

    def __init__(self, aspect: str, *, code: int | None = None) -> None:
        super().__init__(f"{aspect} fetch failed", code=code)
        self.aspect = aspect


class ExtractionError(SyncError):
    """Raised when registrar detail data is malformed or incomplete."""


class StoreError(SyncError):
    """Raised when the local billing database rejects a read or write."""


class ConfigurationGap(SyncError):  # noqa: N818
    """An expected, non-exceptional gap in local configuration (e.g. an unconfigured TLD)."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message


class UnknownClientError(SyncError):
    """Raised when the default client id does not exist in the billing database."""

    def __init__(self, client_id: int) -> None:
        super().__init__(
            f"Client {client_id} could not be found. Provide a valid default client id."
        )
        self.client_id = client_id
