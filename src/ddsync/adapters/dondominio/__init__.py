"""Public interface for the DonDominio adapter."""

from __future__ import annotations

from .client import DonDominioAPIError, DonDominioClient
from .schema import ApiResponse, DomainListData, DomainListEntry, QueryInfo

__all__ = [
    "ApiResponse",
    "DomainListData",
    "DomainListEntry",
    "DonDominioAPIError",
    "DonDominioClient",
    "QueryInfo",
]
