"""Application configuration helpers."""

from __future__ import annotations

from .dondominio import DonDominioConfig, get_dondominio_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import (
    DatabaseConfig,
    StorageConfig,
    StoreConfig,
    get_database_config,
    get_storage_config,
    get_store_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DonDominioConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "StoreConfig",
    "configure_logging",
    "get_database_config",
    "get_dondominio_config",
    "get_storage_config",
    "get_store_config",
    "require_env_var",
    "require_env_vars",
]
