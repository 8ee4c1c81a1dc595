"""
Shared fixtures: an in-memory SQLite record store, optionally seeded with the demo data.
"""

import pytest

from support_dispatch.infra.database import Database
from support_dispatch.memory.record_store import RecordStore
from support_dispatch.services.seed_data import seed_database

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def database():
    db = Database(IN_MEMORY_URL)
    await db.init_models()
    yield db
    await db.dispose()


@pytest.fixture
async def empty_store(database):
    return RecordStore(database)


@pytest.fixture
async def store(database):
    """Record store with the demo orders and invoices (no sample conversations)."""
    await seed_database(database, include_conversations=False)
    return RecordStore(database)
