"""Tests for database engine configuration."""

from shoestore.infrastructure.database import engine_options


def test_sqlite_engine_options() -> None:
    """SQLite connections may be shared across threads."""
    options = engine_options("sqlite+aiosqlite:///./shoestore.db")
    assert options["connect_args"] == {"check_same_thread": False}
    assert "pool_pre_ping" not in options


def test_postgres_engine_options() -> None:
    """Pooled server connections are checked before use."""
    options = engine_options("postgresql+asyncpg://shoestore:secret@db:5432/shoestore")
    assert options["pool_pre_ping"] is True
    assert "connect_args" not in options
