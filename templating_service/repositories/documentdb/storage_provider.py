"""MongoDB/DocumentDB storage provider for users and templates.

Collections:
- users[_{namespace}]: User documents keyed by a unique `id`
- templates[_{namespace}]: Template documents keyed by a unique `id`

List fields (User.team, User.org, Template.tags) are queried with `$all`,
so a filter matches documents whose stored list contains every value given.
"""

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ...schemas.response import StorageResponse
from ...schemas.template import Template
from ...schemas.user import User
from ..interfaces import StorageProviderBase, not_found_message
from ..query import PartialEntity, build_entity_filter, new_document, partial_fields
from .client import ConnectionOptions, DocumentCollection, DocumentDBClient


logger = logging.getLogger(__name__)


EntityT = TypeVar("EntityT", bound=BaseModel)


class MongoDBStorageProvider(StorageProviderBase):
    """Storage provider backed by a DocumentDBClient."""

    def __init__(
        self,
        client: DocumentDBClient,
    ):
        self._client = client

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        options: ConnectionOptions | None = None,
        namespace: str | None = None,
    ) -> "MongoDBStorageProvider":
        """Create a provider owning a new DocumentDBClient."""
        return cls(DocumentDBClient(connection_string, options=options, namespace=namespace))

    async def _find(
        self,
        collection: DocumentCollection,
        query: PartialEntity,
        entity_type: type[EntityT],
        entities: str,
    ) -> StorageResponse[list[EntityT]]:
        expression = build_entity_filter(query, entity_type)
        outcome = await collection.find(expression.to_mongo())
        if not outcome.success:
            return StorageResponse.fail(outcome.error_message)
        if not outcome.result:
            return StorageResponse.fail(not_found_message(entities))

        try:
            found = [entity_type.model_validate(doc) for doc in outcome.result]
        except ValidationError as e:
            logger.error(f"Failed to parse {entities} from {collection.name}: {e}")
            return StorageResponse.from_exception(e)
        return StorageResponse.ok(found)

    async def _update(
        self,
        collection: DocumentCollection,
        query: PartialEntity,
        update: PartialEntity,
        entity_type: type[BaseModel],
        entities: str,
    ) -> StorageResponse[None]:
        expression = build_entity_filter(query, entity_type)
        outcome = await collection.find_one_and_update(
            expression.to_mongo(),
            partial_fields(update),
        )
        if not outcome.success:
            return StorageResponse.fail(outcome.error_message)
        if outcome.result is None:
            return StorageResponse.fail(f"{not_found_message(entities)}.")

        logger.info(f"Updated one document in {collection.name}")
        return StorageResponse.ok()

    async def _insert(
        self,
        collection: DocumentCollection,
        entity: PartialEntity,
    ) -> StorageResponse[int]:
        outcome = await collection.create(new_document(entity))
        if not outcome.success:
            return StorageResponse.fail(outcome.error_message)

        logger.info(f"Inserted document {outcome.result['id']} into {collection.name}")
        return StorageResponse.ok(1)

    async def _remove(
        self,
        collection: DocumentCollection,
        query: PartialEntity,
        entity_type: type[BaseModel],
        entities: str,
    ) -> StorageResponse[None]:
        expression = build_entity_filter(query, entity_type)
        outcome = await collection.delete_one(expression.to_mongo())
        if not outcome.success:
            return StorageResponse.fail(outcome.error_message)
        if not outcome.result:
            return StorageResponse.fail(not_found_message(entities))

        logger.info(f"Removed one document from {collection.name}")
        return StorageResponse.ok()

    async def get_users(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[User]]:
        return await self._find(self._client.users, query, User, "users")

    async def get_templates(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[Template]]:
        return await self._find(self._client.templates, query, Template, "templates")

    # Updates only one user
    async def update_user(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        return await self._update(self._client.users, query, update, User, "users")

    async def update_template(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        return await self._update(self._client.templates, query, update, Template, "templates")

    async def insert_user(
        self,
        user: User,
    ) -> StorageResponse[int]:
        return await self._insert(self._client.users, user)

    async def insert_template(
        self,
        template: Template,
    ) -> StorageResponse[int]:
        return await self._insert(self._client.templates, template)

    async def remove_user(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        return await self._remove(self._client.users, query, User, "users")

    async def remove_template(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        return await self._remove(self._client.templates, query, Template, "templates")

    async def connect(self) -> StorageResponse[bool]:
        return await self._client.connect()

    async def close(self) -> StorageResponse[bool]:
        return await self._client.close()
