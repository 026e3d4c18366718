"""Tests for configuration loading."""

from pathlib import Path

import pytest

from shub.config import Config, get_config_dir


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove shub variables and point XDG_CONFIG_HOME at a temp dir."""
    for name in ("GITHUB_USERNAME", "GITHUB_TOKEN", "WORKSPACE_HOME", "SHUB_DATABASE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return tmp_path


class TestGetConfigDir:
    """Tests for locating the config directory."""

    def test_xdg_config_home(self, clean_env) -> None:
        assert get_config_dir() == clean_env / "xdg" / "shub"

    def test_home_fallback(self, monkeypatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_dir() == Path.home() / ".config" / "shub"


class TestConfigFromEnvAndArgs:
    """Tests for merging environment variables and CLI arguments."""

    def test_environment(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_USERNAME", "kafji")
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        monkeypatch.setenv("WORKSPACE_HOME", str(clean_env / "code"))

        config = Config.from_env_and_args()

        assert config.github_username == "kafji"
        assert config.is_authenticated is True
        assert config.workspace_root_dir == str(clean_env / "code")
        assert config.database_path == str(clean_env / "xdg" / "shub" / "shub.db")
        assert config.max_concurrency == 2
        assert config.isolate_failures is False

    def test_arguments_override_environment(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_USERNAME", "kafji")
        monkeypatch.setenv("SHUB_DATABASE", "/env/shub.db")

        config = Config.from_env_and_args(
            username="other",
            database_path=str(clean_env / "cli.db"),
            max_concurrency=6,
            isolate_failures=True,
        )

        assert config.github_username == "other"
        assert config.database_path == str(clean_env / "cli.db")
        assert config.max_concurrency == 6
        assert config.isolate_failures is True

    def test_database_from_environment(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("SHUB_DATABASE", "/env/shub.db")
        config = Config.from_env_and_args(username="kafji")
        assert config.database_path == "/env/shub.db"

    def test_missing_username(self, clean_env) -> None:
        with pytest.raises(ValueError, match="GITHUB_USERNAME"):
            Config.from_env_and_args()

    def test_invalid_workers(self, clean_env) -> None:
        with pytest.raises(ValueError, match="--workers must be at least 1"):
            Config.from_env_and_args(username="kafji", max_concurrency=0)

    def test_unauthenticated(self, clean_env) -> None:
        assert Config.from_env_and_args(username="kafji").is_authenticated is False
