"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.results import InsertOneResult

from hrdesk.core.errors import StoreError
from hrdesk.data.database import DatabaseManager, get_database_manager
from hrdesk.data.models.base import BaseDocument
from hrdesk.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


@contextmanager
def store_errors(collection_name: str, operation: str) -> Iterator[None]:
    """Re-raise driver failures as opaque StoreError, keeping the cause."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"{operation} on {collection_name} failed: {e}")
        raise StoreError(original_error=e) from e


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Implements both synchronous and asynchronous CRUD operations.
    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    def _store_errors(self, operation: str):
        return store_errors(self.collection_name, operation)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _parse_object_id(id_value: Any) -> Optional[ObjectId]:
        """Convert to ObjectId, or None when the value cannot be one."""
        if isinstance(id_value, ObjectId):
            return id_value
        if isinstance(id_value, str) and ObjectId.is_valid(id_value):
            return ObjectId(id_value)
        return None

    # -------------------------------------------------------------------------
    # Synchronous CRUD Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Create a new document."""
        collection = self._get_sync_collection()
        document = self._to_document(model)

        with self._store_errors("insert"):
            result: InsertOneResult = collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID. Malformed IDs resolve to nothing."""
        object_id = self._parse_object_id(id_value)
        if object_id is None:
            return None
        collection = self._get_sync_collection()
        with self._store_errors("find_one"):
            document = collection.find_one({"_id": object_id})
        return self._to_model(document)

    def update(self, id_value: str | ObjectId, update_data: dict[str, Any]) -> Optional[T]:
        """
        Atomically set fields on a document by ID.

        Returns the updated document, or None when the ID does not resolve.
        """
        object_id = self._parse_object_id(id_value)
        if object_id is None:
            return None
        collection = self._get_sync_collection()
        with self._store_errors("find_one_and_update"):
            document = collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        if document is not None:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
        return self._to_model(document)

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        collection = self._get_sync_collection()
        with self._store_errors("count_documents"):
            return collection.count_documents(query or {})

    def delete_all(self) -> int:
        """Remove every document in the collection."""
        collection = self._get_sync_collection()
        with self._store_errors("delete_many"):
            result = collection.delete_many({})
        logger.debug(f"Deleted {result.deleted_count} {self.collection_name} documents")
        return result.deleted_count

    # -------------------------------------------------------------------------
    # Asynchronous CRUD Operations
    # -------------------------------------------------------------------------

    async def create_async(self, model: T) -> T:
        """Create a new document asynchronously."""
        collection = self._get_async_collection()
        document = self._to_document(model)

        with self._store_errors("insert"):
            result: InsertOneResult = await collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    async def get_by_id_async(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID asynchronously."""
        object_id = self._parse_object_id(id_value)
        if object_id is None:
            return None
        collection = self._get_async_collection()
        with self._store_errors("find_one"):
            document = await collection.find_one({"_id": object_id})
        return self._to_model(document)

    async def update_async(
        self, id_value: str | ObjectId, update_data: dict[str, Any]
    ) -> Optional[T]:
        """Atomically set fields on a document by ID asynchronously."""
        object_id = self._parse_object_id(id_value)
        if object_id is None:
            return None
        collection = self._get_async_collection()
        with self._store_errors("find_one_and_update"):
            document = await collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        if document is not None:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
        return self._to_model(document)
