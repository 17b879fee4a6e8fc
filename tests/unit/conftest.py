"""
Conftest for unit tests.

Provides fixtures specific to unit tests.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from templating_service.repositories.documentdb.client import DocumentCollection
from templating_service.schemas.response import StorageResponse
from tests.fixtures.mocks.mock_motor import make_motor_collection

logger = logging.getLogger(__name__)


@pytest.fixture
def users_collection():
    """Mock Motor users collection."""
    return make_motor_collection("users")


@pytest.fixture
def templates_collection():
    """Mock Motor templates collection."""
    return make_motor_collection("templates")


@pytest.fixture
def mock_documentdb_client(users_collection, templates_collection):
    """
    Create a DocumentDBClient stand-in wrapping the mock collections.

    Returns:
        Mock client with users/templates adapters and async connect/close
    """
    client = MagicMock()
    client.users = DocumentCollection(users_collection)
    client.templates = DocumentCollection(templates_collection)
    client.connect = AsyncMock(return_value=StorageResponse.ok(True))
    client.close = AsyncMock(return_value=StorageResponse.ok(True))
    return client
