"""HTTP client for the DonDominio API."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from ddsync.adapters.http_resilience import ResilientClient
from ddsync.config.dondominio import DonDominioConfig, get_dondominio_config
from ddsync.domain.errors import RemoteError
from ddsync.domain.model import DomainListPage, ListedDomain

from .schema import ApiResponse, DomainListData

if TYPE_CHECKING:
    from collections.abc import Callable

    from ddsync.config.http_resilience import ResilienceConfig
    from ddsync.domain.model import DetailAspect
    from ddsync.domain.ports.registry import DetailRecord

log = getLogger(__name__)

LIST_ACTION = "domain/list/"
GETINFO_ACTION = "domain/getinfo/"


class DonDominioAPIError(RemoteError):
    """Raised when the DonDominio API or its transport fails."""


class DonDominioClient:
    """Blocking facade over the asynchronous DonDominio HTTP API."""

    def __init__(
        self,
        *,
        config: DonDominioConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_dondominio_config()
        self._resilience = self._config.resilience
        self._client_factory = client_factory or ResilientClient

    def list_domains(self, page: int) -> DomainListPage:
        data = self._call(
            LIST_ACTION,
            {"page": str(page), "pageLength": str(self._config.page_length)},
        )
        try:
            listing = DomainListData.model_validate(data)
        except ValidationError as exc:
            raise DonDominioAPIError("Unexpected domain list payload") from exc

        return DomainListPage(
            records=tuple(
                ListedDomain(name=entry.name, listed_tld=entry.tld) for entry in listing.domains
            ),
            results=listing.query_info.results,
            total=listing.query_info.total,
        )

    def get_domain_detail(self, name: str, aspect: DetailAspect) -> DetailRecord:
        return self._call(GETINFO_ACTION, {"domain": name, "infoType": str(aspect)})

    def _call(self, action: str, params: dict[str, str]) -> dict[str, Any]:
        return asyncio.run(self._call_async(action, params))

    async def _call_async(self, action: str, params: dict[str, str]) -> dict[str, Any]:
        base_url = self._resilience.base_url
        if base_url is None:
            raise DonDominioAPIError("Missing DonDominio base_url in resilience configuration")
        url = f"{base_url.rstrip('/')}/{action}"
        form = {
            "apiuser": self._config.api_user,
            "apipasswd": self._config.api_password,
            "output-format": "json",
            **params,
        }

        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.post(url, data=form)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise DonDominioAPIError(f"HTTP {status} from {action}", code=status) from exc
        except httpx.HTTPError as exc:
            raise DonDominioAPIError(f"Request to {action} failed: {exc}") from exc

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise DonDominioAPIError(f"Invalid JSON returned by {action}") from exc

        try:
            envelope = ApiResponse.model_validate(payload)
        except ValidationError as exc:
            raise DonDominioAPIError(f"Unexpected response envelope from {action}") from exc

        if not envelope.success:
            message = envelope.error_message or f"API error {envelope.error_code}"
            log.debug("DonDominio API error %s: %s", envelope.error_code, message)
            raise DonDominioAPIError(message, code=envelope.error_code)

        return envelope.response_data


if TYPE_CHECKING:
    from ddsync.domain.ports.registry import RegistryClient

    _client_check: RegistryClient = DonDominioClient()
