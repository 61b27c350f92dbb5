"""
Base repository for MongoDB-backed aggregates.

A repository binds one collection to one pydantic model and exposes the
document-store operations the services need: insert, find by id, a
single-field lookup, replace, and delete. Driver failures surface as
``InternalError``; unique-index violations as ``AlreadyExists``.
"""
import logging
from functools import wraps
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError
from devconnector.exceptions import AlreadyExists, InternalError
from devconnector.models.common import MongoModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=MongoModel)


def storage_errors(func: Callable):
    """Translate driver exceptions raised by a repository coroutine."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key in '{self.collection_name}': {e}")
            raise AlreadyExists(f"{self.model.__name__} already exists") from e
        except PyMongoError as e:
            logger.error(
                f"Storage failure in {type(self).__name__}.{func.__name__}",
                exc_info=True
            )
            raise InternalError("Storage operation failed") from e
    return wrapper


class DocumentRepository(Generic[ModelT]):
    """Repository for one collection of ``model`` documents."""

    collection_name: str
    model: Type[ModelT]

    def __init__(self, database_provider: Callable[[], Any]):
        self._database_provider = database_provider

    def _get_collection(self):
        """Get the bound collection."""
        database = self._database_provider()
        if database is None:
            raise InternalError("Database not initialized")
        return database[self.collection_name]

    def _load(self, document: Optional[Dict[str, Any]]) -> Optional[ModelT]:
        if document is None:
            return None
        return self.model.model_validate(document)

    @storage_errors
    async def create(self, item: ModelT) -> ModelT:
        """Insert a new document."""
        await self._get_collection().insert_one(item.to_document())
        return item

    @storage_errors
    async def find_by_id(self, item_id: ObjectId) -> Optional[ModelT]:
        """Find document by MongoDB _id."""
        document = await self._get_collection().find_one({"_id": item_id})
        return self._load(document)

    @storage_errors
    async def find_by_ids(self, item_ids: Iterable[ObjectId]) -> List[ModelT]:
        """Find all documents whose _id is in ``item_ids``."""
        cursor = self._get_collection().find({"_id": {"$in": list(item_ids)}})
        items = []
        async for document in cursor:
            items.append(self._load(document))
        return items

    @storage_errors
    async def find_one_by(self, field: str, value: Any) -> Optional[ModelT]:
        """Find the first document whose ``field`` equals ``value``."""
        document = await self._get_collection().find_one({field: value})
        return self._load(document)

    @storage_errors
    async def find_all(self, sort_field: Optional[str] = None, direction: int = -1) -> List[ModelT]:
        """Find every document, optionally sorted on one field."""
        cursor = self._get_collection().find({})
        if sort_field:
            cursor = cursor.sort(sort_field, direction)
        items = []
        async for document in cursor:
            items.append(self._load(document))
        return items

    @storage_errors
    async def save(self, item: ModelT) -> ModelT:
        """Replace the stored document with ``item``."""
        result = await self._get_collection().replace_one({"_id": item.id}, item.to_document())
        if result.matched_count == 0:
            raise InternalError(f"{self.model.__name__} {item.id} vanished during update")
        return item

    @storage_errors
    async def delete_by_id(self, item_id: ObjectId) -> bool:
        """Delete one document by _id."""
        result = await self._get_collection().delete_one({"_id": item_id})
        return result.deleted_count > 0

    @storage_errors
    async def delete_many_by(self, field: str, value: Any) -> int:
        """Delete all documents whose ``field`` equals ``value``."""
        result = await self._get_collection().delete_many({field: value})
        return result.deleted_count
