"""Root pytest configuration."""

from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import create_async_engine

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture(autouse=True)
def reminder_timezone(monkeypatch):
    """Apply the reminder window in UTC unless a test says otherwise."""
    monkeypatch.setenv("REMINDER_TIMEZONE", "UTC")


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Provide a fresh SQLite database with the schema created.

    The engine is injected into core.database so that functions using
    get_connection()/get_transaction() hit this scratch database.
    """
    from core.database import set_engine
    from core.tables import metadata

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    set_engine(engine)
    try:
        yield engine
    finally:
        set_engine(None)
        await engine.dispose()
