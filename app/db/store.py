"""
Document Store
Generic access to named collections with a uniform result envelope
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.core.results import NOT_AVAILABLE, NOT_FOUND, ApiResponse, PaginationInfo, fail, ok
from app.models.query import QueryOptions, SortOrder, WhereClause

logger = logging.getLogger(__name__)


class DocumentNotFound(Exception):
    """Raised inside a backend when a by-id lookup matches nothing"""


class StoreError(Exception):
    """Raised inside a backend for a failed write"""


def strip_id(data: Dict[str, Any]) -> Dict[str, Any]:
    """The id is assigned by the store and never written as a field."""
    return {k: v for k, v in data.items() if k not in ("id", "_id")}


class DocumentStore:
    """
    Base class for store backends.

    Public operations never raise: backend exceptions are logged and
    turned into `ApiResponse(success=False, error=...)`. Subclasses
    implement the underscore methods and may raise freely.
    """

    @property
    def available(self) -> bool:
        return True

    async def _guard(self, action: str, operation: Callable[[], Awaitable[Any]]) -> ApiResponse:
        if not self.available:
            logger.warning("%s skipped: %s", action, NOT_AVAILABLE)
            return fail(NOT_AVAILABLE)
        try:
            return ok(await operation())
        except DocumentNotFound as e:
            return fail(str(e) or NOT_FOUND)
        except Exception as e:
            logger.exception("Error %s", action)
            return fail(str(e) or e.__class__.__name__)

    async def get_collection(self, name: str, options: Optional[QueryOptions] = None) -> ApiResponse:
        options = options or QueryOptions()
        result = await self._guard(f"getting collection {name}", lambda: self._find(name, options))
        if result.success:
            total = len(result.data)
            result.pagination = PaginationInfo(
                page=1, limit=options.limit or total, total=total, total_pages=1
            )
        return result

    async def get_document(self, name: str, doc_id: str) -> ApiResponse:
        return await self._guard(f"getting document {name}/{doc_id}", lambda: self._get(name, doc_id))

    async def add_document(self, name: str, data: Dict[str, Any]) -> ApiResponse:
        return await self._guard(f"adding document to {name}", lambda: self._add(name, strip_id(data)))

    async def set_document(self, name: str, doc_id: str, data: Dict[str, Any]) -> ApiResponse:
        return await self._guard(f"setting document {name}/{doc_id}",
                                 lambda: self._set(name, doc_id, strip_id(data)))

    async def update_document(self, name: str, doc_id: str, partial: Dict[str, Any]) -> ApiResponse:
        return await self._guard(f"updating document {name}/{doc_id}",
                                 lambda: self._update(name, doc_id, strip_id(partial)))

    async def delete_document(self, name: str, doc_id: str) -> ApiResponse:
        return await self._guard(f"deleting document {name}/{doc_id}", lambda: self._delete(name, doc_id))

    async def query_documents(self, name: str, field: str, operator: str, value: Any) -> ApiResponse:
        async def run() -> List[Dict[str, Any]]:
            options = QueryOptions(where=[WhereClause(field=field, operator=operator, value=value)])
            return await self._find(name, options)

        return await self._guard(f"querying {name} on {field}", run)

    async def _find(self, name: str, options: QueryOptions) -> List[Dict[str, Any]]:
        raise NotImplementedError

    async def _get(self, name: str, doc_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def _add(self, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def _set(self, name: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def _update(self, name: str, doc_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def _delete(self, name: str, doc_id: str) -> bool:
        raise NotImplementedError


MONGO_OPERATORS = {
    "==": "$eq",
    "!=": "$ne",
    "<": "$lt",
    "<=": "$lte",
    ">": "$gt",
    ">=": "$gte",
    "in": "$in",
    "not-in": "$nin",
}


class MongoStore(DocumentStore):
    """MongoDB backend over a Motor database handle"""

    def __init__(self, database: Optional[AsyncIOMotorDatabase]):
        self.database = database

    @property
    def available(self) -> bool:
        return self.database is not None

    @staticmethod
    def _key(doc_id: str) -> Any:
        # Store-assigned ids are ObjectIds; keyed writes (user profiles) use plain strings
        return ObjectId(doc_id) if ObjectId.is_valid(doc_id) else doc_id

    @staticmethod
    def _to_entity(raw: Dict[str, Any]) -> Dict[str, Any]:
        raw = dict(raw)
        return {"id": str(raw.pop("_id")), **raw}

    @classmethod
    def build_filter(cls, where: List[WhereClause]) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        for clause in where:
            field, value = clause.field, clause.value
            if field == "id":
                field = "_id"
                value = [cls._key(v) for v in value] if isinstance(value, list) else cls._key(value)
            condition = query.setdefault(field, {})
            if clause.operator == "array-contains":
                condition["$elemMatch"] = {"$eq": value}
            else:
                condition[MONGO_OPERATORS[clause.operator]] = value
        return query

    async def _find(self, name: str, options: QueryOptions) -> List[Dict[str, Any]]:
        cursor = self.database[name].find(self.build_filter(options.where))
        if options.order_by:
            cursor = cursor.sort([
                (o.field, DESCENDING if o.direction == SortOrder.DESC else ASCENDING)
                for o in options.order_by
            ])
        if options.limit:
            cursor = cursor.limit(options.limit)
        return [self._to_entity(raw) for raw in await cursor.to_list(length=None)]

    async def _get(self, name: str, doc_id: str) -> Dict[str, Any]:
        raw = await self.database[name].find_one({"_id": self._key(doc_id)})
        if raw is None:
            raise DocumentNotFound(NOT_FOUND)
        return self._to_entity(raw)

    async def _add(self, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        collection = self.database[name]
        result = await collection.insert_one(dict(data))
        raw = await collection.find_one({"_id": result.inserted_id})
        if raw is None:
            raise StoreError("Failed to create document")
        return self._to_entity(raw)

    async def _set(self, name: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        collection = self.database[name]
        await collection.replace_one({"_id": self._key(doc_id)}, dict(data), upsert=True)
        raw = await collection.find_one({"_id": self._key(doc_id)})
        if raw is None:
            raise StoreError("Failed to write document")
        return self._to_entity(raw)

    async def _update(self, name: str, doc_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        collection = self.database[name]
        if partial:
            await collection.update_one({"_id": self._key(doc_id)}, {"$set": partial})
        raw = await collection.find_one({"_id": self._key(doc_id)})
        if raw is None:
            raise DocumentNotFound("Document not found after update")
        return self._to_entity(raw)

    async def _delete(self, name: str, doc_id: str) -> bool:
        await self.database[name].delete_one({"_id": self._key(doc_id)})
        return True
