"""DocumentDB storage provider implementation using Motor (async MongoDB driver)."""

from .client import (
    ConnectionOptions,
    DocumentCollection,
    DocumentDBClient,
    get_collection_name,
)
from .storage_provider import MongoDBStorageProvider

__all__ = [
    "ConnectionOptions",
    "DocumentCollection",
    "DocumentDBClient",
    "MongoDBStorageProvider",
    "get_collection_name",
]
