"""
Storage provider factory - creates the concrete provider based on configuration.
"""

import logging
from typing import Optional

from ..core.config import settings
from .interfaces import StorageProviderBase

logger = logging.getLogger(__name__)

# Singleton instance
_storage_provider: Optional[StorageProviderBase] = None


def create_storage_provider(
    backend: Optional[str] = None,
    connection_string: Optional[str] = None,
    namespace: Optional[str] = None,
) -> StorageProviderBase:
    """Create a new storage provider; arguments override settings."""
    backend = backend or settings.storage_backend
    logger.info(f"Creating storage provider with backend: {backend}")

    if backend == "memory":
        from .memory.storage_provider import InMemoryStorageProvider
        return InMemoryStorageProvider()

    from .documentdb.client import ConnectionOptions
    from .documentdb.storage_provider import MongoDBStorageProvider
    return MongoDBStorageProvider.from_connection_string(
        connection_string or settings.mongodb_connection_string,
        options=ConnectionOptions(
            use_create_index=settings.mongodb_create_indexes,
            connect_timeout_ms=settings.mongodb_connect_timeout_ms,
            socket_timeout_ms=settings.mongodb_socket_timeout_ms,
        ),
        namespace=namespace or settings.mongodb_namespace,
    )


def get_storage_provider() -> StorageProviderBase:
    """Get storage provider singleton."""
    global _storage_provider

    if _storage_provider is None:
        _storage_provider = create_storage_provider()
    return _storage_provider


def reset_storage_provider() -> None:
    """Reset the storage provider singleton. USE ONLY IN TESTS."""
    global _storage_provider
    _storage_provider = None
