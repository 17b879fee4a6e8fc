"""DocumentDB/MongoDB client wrapper owning the Motor connection handle."""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pydantic import BaseModel, ConfigDict, Field

from ...schemas.response import StorageResponse


logger = logging.getLogger(__name__)


# Constants
DEFAULT_DATABASE_NAME: str = "templates"
USERS_COLLECTION: str = "users"
TEMPLATES_COLLECTION: str = "templates"
ID_FIELD: str = "id"


class ConnectionOptions(BaseModel):
    """
    Connection options handed to the driver.

    Timeouts are forwarded to Motor. use_create_index controls index
    creation on connect. The parser, topology and find-and-modify flags
    describe behaviour Motor always has, so they are kept for callers but
    not forwarded. Any extra option is passed to Motor as-is.
    """

    model_config = ConfigDict(extra="allow")

    use_new_url_parser: bool = True
    use_create_index: bool = True
    use_unified_topology: bool = True
    connect_timeout_ms: int = Field(default=5000, gt=0)
    socket_timeout_ms: int = Field(default=30000, gt=0)
    use_find_and_modify: bool = False

    def to_driver_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for AsyncIOMotorClient."""
        kwargs: dict[str, Any] = {
            "connectTimeoutMS": self.connect_timeout_ms,
            "socketTimeoutMS": self.socket_timeout_ms,
        }
        kwargs.update(self.model_extra or {})
        return kwargs


def get_collection_name(
    base_name: str,
    namespace: str | None = None,
) -> str:
    """Get full collection name with optional namespace."""
    if namespace:
        return f"{base_name}_{namespace}"
    return base_name


def _redact_connection_string(
    url: str,
) -> str:
    """Hide the password in a MongoDB URL for safe logging."""
    if "://" not in url:
        return url
    protocol, rest = url.split("://", 1)
    if "@" not in rest:
        return url
    credentials, host = rest.rsplit("@", 1)
    username = credentials.split(":", 1)[0]
    return f"{protocol}://{username}:***@{host}"


class DocumentCollection:
    """
    Collection adapter that reports driver outcomes as StorageResponse.

    Any error raised by the driver is logged and returned as a failed
    response; callers branch on the response instead of catching.
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
    ):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def find(
        self,
        query: dict[str, Any],
    ) -> StorageResponse[list[dict[str, Any]]]:
        """Find all documents matching a filter, in driver order."""
        try:
            documents = await self._collection.find(query).to_list(length=None)
        except Exception as e:
            logger.error(f"Find on {self.name} failed: {e}", exc_info=True)
            return StorageResponse.from_exception(e)

        for doc in documents:
            doc.pop("_id", None)

        logger.debug(f"Found {len(documents)} documents in {self.name} for {query}")
        return StorageResponse.ok(documents)

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
    ) -> StorageResponse[dict[str, Any]]:
        """Set fields on the first matching document; result is None when nothing matched."""
        try:
            doc = await self._collection.find_one_and_update(query, {"$set": update})
        except Exception as e:
            logger.error(f"Update on {self.name} failed: {e}", exc_info=True)
            return StorageResponse.from_exception(e)

        if doc is not None:
            doc.pop("_id", None)
        return StorageResponse.ok(doc)

    async def create(
        self,
        document: dict[str, Any],
    ) -> StorageResponse[dict[str, Any]]:
        """Insert a single document."""
        # insert_one adds _id to the dict it is given
        doc = dict(document)
        try:
            await self._collection.insert_one(doc)
        except Exception as e:
            logger.error(f"Insert into {self.name} failed: {e}", exc_info=True)
            return StorageResponse.from_exception(e)

        doc.pop("_id", None)
        return StorageResponse.ok(doc)

    async def delete_one(
        self,
        query: dict[str, Any],
    ) -> StorageResponse[int]:
        """Delete the first matching document; result is the deleted count."""
        try:
            result = await self._collection.delete_one(query)
        except Exception as e:
            logger.error(f"Delete from {self.name} failed: {e}", exc_info=True)
            return StorageResponse.from_exception(e)

        return StorageResponse.ok(result.deleted_count)

    async def ensure_unique_index(
        self,
        field: str,
    ) -> None:
        """Create a sparse unique index on a field if missing."""
        await self._collection.create_index(field, unique=True, sparse=True)
        logger.info(f"Ensured unique index on {self.name}.{field}")


class DocumentDBClient:
    """
    Owns one Motor client and exposes the users and templates collections.

    The Motor client is created here; no network traffic happens until
    connect() or the first operation.
    """

    def __init__(
        self,
        connection_string: str,
        options: ConnectionOptions | None = None,
        namespace: str | None = None,
    ):
        self._options = options or ConnectionOptions()
        self._client = AsyncIOMotorClient(
            connection_string,
            **self._options.to_driver_kwargs(),
        )
        self._database = self._client.get_default_database(default=DEFAULT_DATABASE_NAME)

        self.users = DocumentCollection(
            self._database[get_collection_name(USERS_COLLECTION, namespace)]
        )
        self.templates = DocumentCollection(
            self._database[get_collection_name(TEMPLATES_COLLECTION, namespace)]
        )
        logger.info(
            f"Initialized DocumentDB client for {_redact_connection_string(connection_string)} "
            f"(database: {self._database.name}, collections: "
            f"{self.users.name}, {self.templates.name})"
        )

    async def connect(self) -> StorageResponse[bool]:
        """Verify the server is reachable and create indexes if enabled."""
        try:
            server_info = await self._client.server_info()
            if self._options.use_create_index:
                await self.users.ensure_unique_index(ID_FIELD)
                await self.templates.ensure_unique_index(ID_FIELD)
        except Exception as e:
            logger.error(f"Failed to connect to DocumentDB: {e}", exc_info=True)
            return StorageResponse.from_exception(e)

        logger.info(
            f"Connected to DocumentDB/MongoDB {server_info.get('version', 'unknown')}"
        )
        return StorageResponse.ok(True)

    async def close(self) -> StorageResponse[bool]:
        """Close the Motor client."""
        self._client.close()
        logger.info("Closed DocumentDB client")
        return StorageResponse.ok(True)
