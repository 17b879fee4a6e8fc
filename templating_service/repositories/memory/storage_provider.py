"""In-memory storage provider for development and tests.

Documents live in per-collection lists in insertion order. Filters are
evaluated in-process with the same clauses the MongoDB provider renders,
and `id` is unique per collection just like the DocumentDB index.
"""

import copy
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from ...schemas.response import StorageResponse
from ...schemas.template import Template
from ...schemas.user import User
from ..interfaces import StorageProviderBase, not_found_message
from ..query import PartialEntity, build_entity_filter, new_document, partial_fields


logger = logging.getLogger(__name__)


def _duplicate_id_message(
    collection: str,
    doc_id: Any,
) -> str:
    return f"Duplicate key error: {collection} with id '{doc_id}' already exists"


class InMemoryStorageProvider(StorageProviderBase):
    """Storage provider keeping documents in process memory."""

    def __init__(self):
        self._collections: dict[str, list[dict[str, Any]]] = {
            "users": [],
            "templates": [],
        }

    def _id_taken(
        self,
        collection: str,
        doc_id: Any,
        exclude: dict[str, Any] | None = None,
    ) -> bool:
        """Whether another document in the collection already uses this id."""
        return any(
            doc is not exclude and doc.get("id") == doc_id
            for doc in self._collections[collection]
        )

    def _matching(
        self,
        collection: str,
        query: PartialEntity,
        entity_type: type[BaseModel],
    ) -> list[dict[str, Any]]:
        expression = build_entity_filter(query, entity_type)
        return [doc for doc in self._collections[collection] if expression.matches(doc)]

    def _find(
        self,
        collection: str,
        query: PartialEntity,
        entity_type: type[BaseModel],
    ) -> StorageResponse[list[Any]]:
        matches = self._matching(collection, query, entity_type)
        if not matches:
            return StorageResponse.fail(not_found_message(collection))
        try:
            found = [entity_type.model_validate(copy.deepcopy(doc)) for doc in matches]
        except ValidationError as e:
            logger.error(f"Failed to parse {collection}: {e}")
            return StorageResponse.from_exception(e)
        return StorageResponse.ok(found)

    def _update(
        self,
        collection: str,
        query: PartialEntity,
        update: PartialEntity,
        entity_type: type[BaseModel],
    ) -> StorageResponse[None]:
        matches = self._matching(collection, query, entity_type)
        if not matches:
            return StorageResponse.fail(f"{not_found_message(collection)}.")

        fields = copy.deepcopy(partial_fields(update))
        target = matches[0]
        if "id" in fields and self._id_taken(collection, fields["id"], exclude=target):
            return StorageResponse.fail(_duplicate_id_message(collection, fields["id"]))

        target.update(fields)
        logger.debug(f"Updated one document in {collection}")
        return StorageResponse.ok()

    def _insert(
        self,
        collection: str,
        entity: PartialEntity,
    ) -> StorageResponse[int]:
        doc = copy.deepcopy(new_document(entity))
        documents = self._collections[collection]
        if self._id_taken(collection, doc["id"]):
            return StorageResponse.fail(_duplicate_id_message(collection, doc["id"]))

        documents.append(doc)
        logger.debug(f"Inserted document {doc['id']} into {collection}")
        return StorageResponse.ok(1)

    def _remove(
        self,
        collection: str,
        query: PartialEntity,
        entity_type: type[BaseModel],
    ) -> StorageResponse[None]:
        matches = self._matching(collection, query, entity_type)
        if not matches:
            return StorageResponse.fail(not_found_message(collection))

        documents = self._collections[collection]
        target = matches[0]
        self._collections[collection] = [doc for doc in documents if doc is not target]
        logger.debug(f"Removed one document from {collection}")
        return StorageResponse.ok()

    async def get_users(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[User]]:
        return self._find("users", query, User)

    async def get_templates(
        self,
        query: PartialEntity,
    ) -> StorageResponse[list[Template]]:
        return self._find("templates", query, Template)

    async def update_user(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        return self._update("users", query, update, User)

    async def update_template(
        self,
        query: PartialEntity,
        update: PartialEntity,
    ) -> StorageResponse[None]:
        return self._update("templates", query, update, Template)

    async def insert_user(
        self,
        user: User,
    ) -> StorageResponse[int]:
        return self._insert("users", user)

    async def insert_template(
        self,
        template: Template,
    ) -> StorageResponse[int]:
        return self._insert("templates", template)

    async def remove_user(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        return self._remove("users", query, User)

    async def remove_template(
        self,
        query: PartialEntity,
    ) -> StorageResponse[None]:
        return self._remove("templates", query, Template)

    async def connect(self) -> StorageResponse[bool]:
        logger.info("In-memory storage provider ready")
        return StorageResponse.ok(True)

    async def close(self) -> StorageResponse[bool]:
        return StorageResponse.ok(True)
