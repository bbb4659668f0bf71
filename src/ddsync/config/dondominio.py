"""DonDominio API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from ddsync import __version__

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_DONDOMINIO_ENDPOINT = "https://simple-api.dondominio.net"
DONDOMINIO_TIMEOUT_SECONDS = 30.0
DEFAULT_PAGE_LENGTH = 1000
MAX_PAGE_LENGTH = 1000


def default_resilience_config(endpoint: str = DEFAULT_DONDOMINIO_ENDPOINT) -> ResilienceConfig:
    return ResilienceConfig(
        name="dondominio",
        base_url=endpoint,
        timeout_seconds=DONDOMINIO_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"User-Agent": f"ddsync/{__version__}"},
    )


@dataclass(frozen=True)
class DonDominioConfig:
    """Holds DonDominio API credentials and paging settings."""

    api_user: str
    api_password: str = field(repr=False)
    page_length: int = DEFAULT_PAGE_LENGTH
    resilience: ResilienceConfig = field(default_factory=default_resilience_config)

    def __post_init__(self) -> None:
        if not 1 <= self.page_length <= MAX_PAGE_LENGTH:
            raise ConfigurationError(
                f"Page length must be between 1 and {MAX_PAGE_LENGTH}, got {self.page_length}"
            )


def get_dondominio_config(
    *,
    api_user: str | None = None,
    api_password: str | None = None,
    page_length: int | None = None,
) -> DonDominioConfig:
    """Build the API configuration, letting explicit arguments override the environment."""

    required = [
        name
        for name, override in (
            ("DONDOMINIO_API_USER", api_user),
            ("DONDOMINIO_API_PASSWORD", api_password),
        )
        if not override
    ]
    values = require_env_vars(required) if required else {}
    endpoint = optional_env_var("DONDOMINIO_API_ENDPOINT", DEFAULT_DONDOMINIO_ENDPOINT)
    return DonDominioConfig(
        api_user=api_user or values["DONDOMINIO_API_USER"],
        api_password=api_password or values["DONDOMINIO_API_PASSWORD"],
        page_length=page_length
        or optional_int_env_var("DONDOMINIO_PAGE_LENGTH", DEFAULT_PAGE_LENGTH),
        resilience=default_resilience_config(endpoint.rstrip("/")),
    )
