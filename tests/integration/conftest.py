"""
Conftest for integration tests.

Integration tests talk to a real MongoDB given by MONGODB_TEST_URL.
"""

import logging
import os
import uuid

import pytest
from motor.motor_asyncio import AsyncIOMotorClient

from templating_service.repositories.documentdb.client import (
    DEFAULT_DATABASE_NAME,
    TEMPLATES_COLLECTION,
    USERS_COLLECTION,
    get_collection_name,
)
from templating_service.repositories.documentdb.storage_provider import (
    MongoDBStorageProvider,
)

logger = logging.getLogger(__name__)


def mongodb_test_url() -> str | None:
    """Connection string for integration tests, if configured."""
    return os.environ.get("MONGODB_TEST_URL")


@pytest.fixture
async def mongodb_provider():
    """
    Connected MongoDB provider using throwaway collections.

    Yields:
        MongoDBStorageProvider whose collections are dropped afterwards
    """
    url = mongodb_test_url()
    namespace = f"test_{uuid.uuid4().hex[:8]}"
    provider = MongoDBStorageProvider.from_connection_string(url, namespace=namespace)

    response = await provider.connect()
    if not response.success:
        pytest.skip(f"MongoDB not reachable: {response.error_message}")

    yield provider

    await provider.close()
    client = AsyncIOMotorClient(url)
    database = client.get_default_database(default=DEFAULT_DATABASE_NAME)
    for base_name in (USERS_COLLECTION, TEMPLATES_COLLECTION):
        await database.drop_collection(get_collection_name(base_name, namespace))
    client.close()
    logger.debug(f"Dropped integration collections for namespace {namespace}")
