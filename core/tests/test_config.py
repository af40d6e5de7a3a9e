"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from core.config import (
    DEFAULT_SQLITE_PATH,
    ConfigError,
    check_required_env_vars,
    get_bot_token,
    get_catalog_path,
    get_reminder_timezone,
    get_sqlite_path,
    get_storage_backend,
    get_sweep_interval_minutes,
)


class TestBotToken:
    def test_missing_token_is_fatal(self, monkeypatch):
        monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)
        with pytest.raises(ConfigError, match="DISCORD_BOT_TOKEN"):
            get_bot_token()

    def test_returns_token(self, monkeypatch):
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc")
        assert get_bot_token() == "abc"


class TestStorageBackend:
    def test_defaults_to_sqlite_locally(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)
        monkeypatch.delenv("RAILWAY_ENVIRONMENT", raising=False)
        assert get_storage_backend() == "sqlite"

    def test_defaults_to_postgres_in_production(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")
        assert get_storage_backend() == "postgres"

    def test_explicit_choice_wins(self, monkeypatch):
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")
        monkeypatch.setenv("STORAGE_BACKEND", "SQLite")
        assert get_storage_backend() == "sqlite"

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "mongodb")
        with pytest.raises(ConfigError, match="STORAGE_BACKEND"):
            get_storage_backend()

    def test_sqlite_path(self, monkeypatch):
        monkeypatch.delenv("SQLITE_PATH", raising=False)
        assert get_sqlite_path() == DEFAULT_SQLITE_PATH

        monkeypatch.setenv("SQLITE_PATH", "/tmp/sweet.db")
        assert get_sqlite_path() == Path("/tmp/sweet.db")


class TestSweepInterval:
    def test_default_is_hourly(self, monkeypatch):
        monkeypatch.delenv("SWEEP_INTERVAL_MINUTES", raising=False)
        assert get_sweep_interval_minutes() == 60

    def test_override(self, monkeypatch):
        monkeypatch.setenv("SWEEP_INTERVAL_MINUTES", "15")
        assert get_sweep_interval_minutes() == 15

    @pytest.mark.parametrize("raw", ["soon", "0", "-5"])
    def test_invalid_values(self, monkeypatch, raw):
        monkeypatch.setenv("SWEEP_INTERVAL_MINUTES", raw)
        with pytest.raises(ConfigError):
            get_sweep_interval_minutes()


class TestReminderTimezone:
    def test_named_zone(self, monkeypatch):
        monkeypatch.setenv("REMINDER_TIMEZONE", "Europe/Berlin")
        assert get_reminder_timezone().key == "Europe/Berlin"

    def test_unknown_zone(self, monkeypatch):
        monkeypatch.setenv("REMINDER_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ConfigError, match="REMINDER_TIMEZONE"):
            get_reminder_timezone()


class TestCatalogPath:
    def test_unset(self, monkeypatch):
        monkeypatch.delenv("CATALOG_PATH", raising=False)
        assert get_catalog_path() is None

    def test_set(self, monkeypatch):
        monkeypatch.setenv("CATALOG_PATH", "ideas.yaml")
        assert get_catalog_path() == Path("ideas.yaml")


class TestCheckRequiredEnvVars:
    def test_production_requires_everything(self, monkeypatch, capsys):
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)
        monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)

        ok, _ = check_required_env_vars()

        assert ok is False
        assert "DISCORD_BOT_TOKEN" in capsys.readouterr().out

    def test_local_only_warns(self, monkeypatch):
        monkeypatch.delenv("RAILWAY_ENVIRONMENT", raising=False)
        monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)

        ok, warnings = check_required_env_vars()

        assert ok is True
        assert any("DISCORD_BOT_TOKEN" in w for w in warnings)

    def test_production_on_sqlite_needs_no_database_url(self, monkeypatch):
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc")
        monkeypatch.delenv("DATABASE_URL", raising=False)

        ok, warnings = check_required_env_vars()

        assert ok is True
        assert not any("DATABASE_URL" in w for w in warnings)

    def test_production_on_postgres_needs_database_url(self, monkeypatch, capsys):
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc")
        monkeypatch.delenv("DATABASE_URL", raising=False)

        ok, _ = check_required_env_vars()

        assert ok is False
        assert "DATABASE_URL" in capsys.readouterr().out
