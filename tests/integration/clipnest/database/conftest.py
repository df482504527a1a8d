import os

import pytest
import pytest_asyncio
from pymongo import MongoClient
from pymongo.errors import ServerSelectionTimeoutError

from clipnest.database.store import DataStore

MONGO_URI = os.environ.get("CLIPNEST_TEST_MONGO_URI", "mongodb://localhost:27017")
MONGO_DB = "clipnest_test"


def _mongo_available() -> bool:
    """Probe the test MongoDB; False if it is not reachable."""
    client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=2000)
    try:
        client.admin.command("ping")
        return True
    except ServerSelectionTimeoutError:
        return False
    finally:
        client.close()


@pytest.fixture(scope="session")
def mongo_available() -> bool:
    return _mongo_available()


@pytest_asyncio.fixture
async def mongo_store(mongo_available):
    """A DataStore on a clean test database, dropped after the test."""
    if not mongo_available:
        pytest.skip(f"MongoDB not reachable on {MONGO_URI}")
    store = DataStore.mongo(MONGO_URI, MONGO_DB)
    await store.client.drop_database(MONGO_DB)
    await store.initialize()
    try:
        yield store
    finally:
        await store.client.drop_database(MONGO_DB)
        await store.close()
