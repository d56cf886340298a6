"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import dotenv
import pytest

from crypto_client.config import (
    ApiConfig,
    AppConfig,
    Credentials,
    _interpolate_env,
    load_config,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run in an empty directory without Coinbase variables or a .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COINBASE_KEY", raising=False)
    monkeypatch.delenv("COINBASE_SECRET", raising=False)
    monkeypatch.setattr("crypto_client.config.find_dotenv", lambda **_: "")


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        result = _interpolate_env({"key": "${TOK}", "plain": "text"})
        assert result == {"key": "secret", "plain": "text"}

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(None) is None


class TestLoadConfig:
    def test_defaults_without_file(self) -> None:
        cfg = load_config()
        assert isinstance(cfg, AppConfig)
        assert cfg.api.base_url == "https://api.coinbase.com/v2/"
        assert cfg.api.api_version == "2017-08-31"
        assert cfg.api.request_timeout is None

    def test_credentials_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COINBASE_KEY", "env-key")
        monkeypatch.setenv("COINBASE_SECRET", "env-secret")
        cfg = load_config()
        assert cfg.credentials == Credentials(key="env-key", secret="env-secret")

    def test_missing_credentials_become_empty(self) -> None:
        cfg = load_config()
        assert cfg.credentials.key == ""
        assert cfg.credentials.secret == ""

    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert cfg.api.base_url == "https://api.example.com/v2/"
        assert cfg.api.api_version == "2021-01-01"
        assert cfg.api.request_timeout == 15.0
        assert cfg.credentials.key == "yaml-key"

    def test_default_file_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("api:\n  api_version: '2020-02-02'\n")
        assert load_config().api.api_version == "2020-02-02"

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MY_CB_SECRET", "interpolated")
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text('credentials:\n  secret: "${MY_CB_SECRET}"\n')
        assert load_config(cfg_file).credentials.secret == "interpolated"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "empty.yaml"
        cfg_file.write_text("")
        assert load_config(cfg_file).api == ApiConfig()

    def test_dotenv_found_from_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("crypto_client.config.find_dotenv", dotenv.find_dotenv)
        (tmp_path / ".env").write_text("COINBASE_KEY=cwd-key\nCOINBASE_SECRET=cwd-secret\n")
        nested = tmp_path / "nested"
        nested.mkdir()
        monkeypatch.chdir(nested)
        with patch.dict(os.environ):
            cfg = load_config()
        assert cfg.credentials == Credentials(key="cwd-key", secret="cwd-secret")


class TestValidation:
    def test_base_url_scheme(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text('api:\n  base_url: "ftp://api.example.com/v2/"\n')
        with pytest.raises(ValueError, match="http"):
            load_config(cfg_file)

    def test_base_url_trailing_slash(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text('api:\n  base_url: "https://api.example.com/v2"\n')
        with pytest.raises(ValueError, match="end with"):
            load_config(cfg_file)

    def test_non_positive_timeout(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text("api:\n  request_timeout: 0\n")
        with pytest.raises(ValueError, match="request_timeout"):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_credentials_immutable(self) -> None:
        c = Credentials(key="k", secret="s")
        with pytest.raises(AttributeError):
            c.key = "other"  # type: ignore[misc]

    def test_secret_not_in_repr(self) -> None:
        assert "s3cret" not in repr(Credentials(key="k", secret="s3cret"))

    def test_api_config_immutable(self) -> None:
        a = ApiConfig()
        with pytest.raises(AttributeError):
            a.base_url = "x"  # type: ignore[misc]


class TestMalformedFiles:
    def test_invalid_yaml(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text("api: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(cfg_file)

    def test_non_mapping(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "c.yaml"
        cfg_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(cfg_file)
