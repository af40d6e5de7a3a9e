"""Tests for database URL selection."""

import pytest

from core.config import ConfigError
from core.database import _get_database_url, get_sync_database_url


class TestDatabaseUrl:
    def test_sqlite_backend(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "nested" / "sweet.db"))

        url = _get_database_url()

        assert url == f"sqlite+aiosqlite:///{tmp_path / 'nested' / 'sweet.db'}"
        assert (tmp_path / "nested").is_dir()

    @pytest.mark.parametrize(
        "database_url",
        ["postgresql://u:p@db:5432/sweet", "postgres://u:p@db:5432/sweet"],
    )
    def test_postgres_backend_uses_asyncpg(self, monkeypatch, database_url):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        monkeypatch.setenv("DATABASE_URL", database_url)

        assert _get_database_url() == "postgresql+asyncpg://u:p@db:5432/sweet"
        assert get_sync_database_url() == "postgresql://u:p@db:5432/sweet"

    def test_postgres_without_url(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValueError, match="DATABASE_URL"):
            _get_database_url()

    def test_bad_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "redis")

        with pytest.raises(ConfigError):
            _get_database_url()

    def test_sync_sqlite_url(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "sweet.db"))

        assert get_sync_database_url() == f"sqlite:///{tmp_path / 'sweet.db'}"
