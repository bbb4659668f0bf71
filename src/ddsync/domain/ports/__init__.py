"""Domain port definitions for adapters."""

from __future__ import annotations

from .registry import DetailRecord, RegistryClient
from .store import LocalStore

__all__ = [
    "DetailRecord",
    "LocalStore",
    "RegistryClient",
]
