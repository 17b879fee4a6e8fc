"""Storage providers for users and templates."""

from .factory import (
    create_storage_provider,
    get_storage_provider,
    reset_storage_provider,
)
from .interfaces import StorageProviderBase

__all__ = [
    "StorageProviderBase",
    "create_storage_provider",
    "get_storage_provider",
    "reset_storage_provider",
]
