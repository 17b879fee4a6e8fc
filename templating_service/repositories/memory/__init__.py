from .storage_provider import InMemoryStorageProvider

__all__ = ["InMemoryStorageProvider"]
