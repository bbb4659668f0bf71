from __future__ import annotations

import os
from pathlib import Path

import pytest

from ddsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    StoreConfig,
    get_database_config,
    get_dondominio_config,
    get_storage_config,
    get_store_config,
    require_env_var,
    require_env_vars,
)
from ddsync.config.dondominio import DEFAULT_DONDOMINIO_ENDPOINT, DonDominioConfig


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_dondominio_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DONDOMINIO_API_USER", "reseller")
    monkeypatch.setenv("DONDOMINIO_API_PASSWORD", "s3cret")
    monkeypatch.delenv("DONDOMINIO_API_ENDPOINT", raising=False)
    monkeypatch.setenv("DONDOMINIO_PAGE_LENGTH", "250")

    config = get_dondominio_config()

    assert config.api_user == "reseller"
    assert config.page_length == 250
    assert config.resilience.base_url == DEFAULT_DONDOMINIO_ENDPOINT
    assert "s3cret" not in repr(config)


def test_dondominio_config_arguments_override_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("DONDOMINIO_API_USER", raising=False)
    monkeypatch.delenv("DONDOMINIO_API_PASSWORD", raising=False)
    monkeypatch.setenv("DONDOMINIO_API_ENDPOINT", "https://api.test.local/")

    config = get_dondominio_config(api_user="cli", api_password="pw")

    assert config.api_user == "cli"
    assert config.resilience.base_url == "https://api.test.local"


def test_dondominio_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DONDOMINIO_API_USER", raising=False)
    monkeypatch.delenv("DONDOMINIO_API_PASSWORD", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        get_dondominio_config()

    assert "DONDOMINIO_API_PASSWORD" in str(exc.value)
    assert "DONDOMINIO_API_USER" in str(exc.value)


def test_dondominio_config_rejects_bad_page_length(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DONDOMINIO_PAGE_LENGTH", "many")

    with pytest.raises(ConfigurationError):
        get_dondominio_config(api_user="u", api_password="p")

    with pytest.raises(ConfigurationError):
        DonDominioConfig(api_user="u", api_password="p", page_length=0)


def test_storage_config_uses_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DDSYNC_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URI", raising=False)

    storage = get_storage_config()
    database = get_database_config(storage=storage)

    assert storage.resolve_data_dir() == tmp_path.resolve()
    assert database.uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'ddsync.db'}"


def test_database_uri_environment_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "mysql+pymysql://box:pw@db/boxbilling")

    assert get_database_config().uri == "mysql+pymysql://box:pw@db/boxbilling"
    assert os.getenv("DATABASE_URI") == "mysql+pymysql://box:pw@db/boxbilling"


def test_store_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DDSYNC_REGISTRAR_NAME", raising=False)
    monkeypatch.setenv("DDSYNC_ORDER_CURRENCY", "EUR")

    assert get_store_config() == StoreConfig(registrar_name="DonDominio", currency="EUR")
