"""Tests for settings and DATABASE_URL parsing."""

from pathlib import Path

import pytest

from lightning_nodes.config import DEFAULT_DATABASE_URL, MEMORY_DATABASE, Settings, parse_database_url
from lightning_nodes.errors import ConfigError


class TestSettingsFromEnv:
    def test_defaults(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """With nothing set, every field takes its default."""
        settings = Settings.from_env(tmp_path / "missing.env")
        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.poll_interval_secs == 60
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.fetch_timeout_secs == 60.0
        assert settings.log_level == "INFO"

    def test_overrides(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("DATABASE_URL", "sqlite::memory:")
        clean_env.setenv("POLL_INTERVAL_SECS", "5")
        clean_env.setenv("HTTP_HOST", "127.0.0.1")
        clean_env.setenv("HTTP_PORT", "9000")
        clean_env.setenv("FETCH_TIMEOUT_SECS", "2.5")
        clean_env.setenv("LOG_LEVEL", "debug")
        settings = Settings.from_env(tmp_path / "missing.env")
        assert settings.database_url == "sqlite::memory:"
        assert settings.poll_interval_secs == 5
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.fetch_timeout_secs == 2.5
        assert settings.log_level == "debug"

    def test_empty_value_uses_default(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("HTTP_PORT", "  ")
        assert Settings.from_env(tmp_path / "missing.env").port == 8080

    @pytest.mark.parametrize(
        "name,value",
        [
            ("POLL_INTERVAL_SECS", "0"),
            ("POLL_INTERVAL_SECS", "soon"),
            ("HTTP_PORT", "70000"),
            ("FETCH_TIMEOUT_SECS", "-1"),
        ],
    )
    def test_invalid_values_raise(self, clean_env: pytest.MonkeyPatch, tmp_path: Path, name: str, value: str) -> None:
        clean_env.setenv(name, value)
        with pytest.raises(ConfigError):
            Settings.from_env(tmp_path / "missing.env")

    def test_dotenv_file_loaded(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Values in the .env file are picked up."""
        env_file = tmp_path / ".env"
        env_file.write_text("POLL_INTERVAL_SECS=15\nHTTP_PORT=8181\n")
        settings = Settings.from_env(env_file)
        assert settings.poll_interval_secs == 15
        assert settings.port == 8181

    def test_dotenv_found_in_working_directory(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Without an explicit file, .env is read from the current directory."""
        (tmp_path / ".env").write_text("POLL_INTERVAL_SECS=7\n")
        clean_env.chdir(tmp_path)
        assert Settings.from_env().poll_interval_secs == 7

    def test_process_env_wins_over_dotenv(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("HTTP_PORT=8181\n")
        clean_env.setenv("HTTP_PORT", "9191")
        assert Settings.from_env(env_file).port == 9191


class TestParseDatabaseUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("sqlite://nodes.db", "nodes.db"),
            ("sqlite:///var/lib/nodes.db", "/var/lib/nodes.db"),
            ("sqlite:data/nodes.db", "data/nodes.db"),
            ("sqlite://nodes.db?mode=rwc", "nodes.db"),
            ("sqlite::memory:", MEMORY_DATABASE),
            (":memory:", MEMORY_DATABASE),
            ("plain.db", "plain.db"),
        ],
    )
    def test_accepted_forms(self, url: str, expected: str) -> None:
        assert parse_database_url(url) == expected

    @pytest.mark.parametrize("url", ["", "   ", "sqlite://", "sqlite:", "sqlite://?mode=ro"])
    def test_empty_path_raises(self, url: str) -> None:
        with pytest.raises(ConfigError):
            parse_database_url(url)
