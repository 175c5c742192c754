"""Unit tests for the engine options shared by the app and the migrations."""

from sqlalchemy.pool import StaticPool

from tourmarket.core.config import settings
from tourmarket.core.database import engine_options


def test_postgres_engine_uses_configured_ssl_mode(monkeypatch):
    """Test asyncpg connections carry the DB_SSL_MODE setting."""
    monkeypatch.setattr(settings, "db_ssl_mode", "require")

    options = engine_options("postgresql+asyncpg://tour:secret@db:5432/tourmarket")

    assert options == {"connect_args": {"ssl": "require"}}


def test_sqlite_engine_shares_one_connection():
    """Test SQLite engines use a static pool usable across threads."""
    options = engine_options("sqlite+aiosqlite:///:memory:")

    assert options["poolclass"] is StaticPool
    assert options["connect_args"] == {"check_same_thread": False}
