"""Shared fixtures for reporting tests."""

import tempfile
from pathlib import Path
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from tests.fixtures.sample_data import (
    SAMPLE_ORDERS,
    SAMPLE_PRODUCTS,
    SAMPLE_PTFS,
    SAMPLE_SHIPMENTS,
    seed_entities,
)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def temp_db_path() -> AsyncGenerator[Path, None]:
    """Create temporary database file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield db_path


@pytest_asyncio.fixture
async def test_database(temp_db_path: Path):
    """Initialized test database."""
    from uretim.database.connection import Database

    db = Database(temp_db_path)
    await db.connect()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def seeded_database(test_database):
    """Test database holding the sample entity rows."""
    await seed_entities(
        test_database,
        products=SAMPLE_PRODUCTS,
        ptfs=SAMPLE_PTFS,
        orders=SAMPLE_ORDERS,
        shipments=SAMPLE_SHIPMENTS,
    )
    return test_database


@pytest.fixture
def entity_store(test_database):
    from uretim.store.entity_store import EntityStore

    return EntityStore(test_database)


@pytest.fixture
def seeded_store(seeded_database):
    from uretim.store.entity_store import EntityStore

    return EntityStore(seeded_database)


# ============================================================================
# Entity Store Mocking
# ============================================================================


@pytest.fixture
def mock_store():
    """EntityStore double returning nothing by default."""
    store = MagicMock()
    store.find_active_products = AsyncMock(return_value=[])
    store.find_active_ptf = AsyncMock(return_value=[])
    store.find_active_orders = AsyncMock(return_value=[])
    store.find_active_shipments = AsyncMock(return_value=[])
    return store
