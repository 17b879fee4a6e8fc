"""
Storage provider base class for data access abstraction.

This abstract base class defines the contract that ALL storage provider
implementations must follow. Every operation returns a StorageResponse;
no exception escapes a provider.
"""

from abc import ABC, abstractmethod

from ..schemas.response import StorageResponse
from ..schemas.template import Template
from ..schemas.user import User
from .query import PartialEntity


class StorageProviderBase(ABC):
    """Abstract base class for user and template data access."""

    @abstractmethod
    async def get_users(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[User]]:
        """Get all users matching a partial user."""
        pass

    @abstractmethod
    async def get_templates(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[Template]]:
        """Get all templates matching a partial template."""
        pass

    @abstractmethod
    async def update_user(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        """Set fields on one user matching a partial user."""
        pass

    @abstractmethod
    async def update_template(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        """Set fields on one template matching a partial template."""
        pass

    @abstractmethod
    async def insert_user(
        self,
        user: User,
    ) -> StorageResponse[int]:
        """Insert a user."""
        pass

    @abstractmethod
    async def insert_template(
        self,
        template: Template,
    ) -> StorageResponse[int]:
        """Insert a template."""
        pass

    @abstractmethod
    async def remove_user(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        """Remove one user matching a partial user."""
        pass

    @abstractmethod
    async def remove_template(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        """Remove one template matching a partial template."""
        pass

    @abstractmethod
    async def connect(self) -> StorageResponse[bool]:
        """Open the underlying store."""
        pass

    @abstractmethod
    async def close(self) -> StorageResponse[bool]:
        """Close the underlying store."""
        pass


def not_found_message(
    entities: str,
) -> str:
    """Failure message for a lookup that matched nothing."""
    return f"No {entities} found matching given criteria"
