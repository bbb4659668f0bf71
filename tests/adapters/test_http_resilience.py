from __future__ import annotations

import asyncio
import logging

import httpx

from ddsync.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    shared_limiter,
)
from ddsync.config import configure_logging
from ddsync.config.dondominio import default_resilience_config


def test_retry_policy_retries_form_posts() -> None:
    retry = RetryPolicy(total=2).build()

    assert retry.total == 2
    assert "POST" in {str(method).upper() for method in retry.allowed_methods}


def test_default_registrar_resilience_is_rate_limited() -> None:
    config = default_resilience_config("https://api.test.local")

    assert config.base_url == "https://api.test.local"
    assert config.ratelimit == RateLimit(max_calls=5, per_seconds=1.0)
    assert config.default_headers is not None
    assert config.default_headers["User-Agent"].startswith("ddsync/")


def test_clients_with_same_config_share_limiter() -> None:
    config = ResilienceConfig(name="shared", ratelimit=RateLimit(max_calls=2, per_seconds=1.0))
    other = ResilienceConfig(name="other", ratelimit=RateLimit(max_calls=2, per_seconds=1.0))

    first = ResilientClient(config)
    second = ResilientClient(config)

    assert first._limiter is not None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert first._limiter is second._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert shared_limiter(other) is not first._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert shared_limiter(ResilienceConfig(name="unlimited")) is None


def test_resilient_client_posts_form_data() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.content.decode())
        return httpx.Response(200, json={"ok": True})

    async def scenario() -> int:
        async with ResilientClient(ResilienceConfig(name="form-post")) as client:
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            response = await client.post("https://api.test.local/a", data={"x": "1"})
            return response.status_code

    assert asyncio.run(scenario()) == 200
    assert seen == ["x=1"]


def test_configure_logging_quiets_http_libraries() -> None:
    configure_logging(force=True)
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(level=logging.DEBUG, force=True, http_debug=True)
    assert logging.getLogger("httpcore").level == logging.DEBUG
