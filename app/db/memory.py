"""
In-memory document store
Process-local backend used by the test suite and STORE_BACKEND=memory
"""
import copy
import uuid
from typing import Any, Dict, List

from app.core.filtering import matches_where, sort_by_keys
from app.core.results import NOT_FOUND
from app.db.store import DocumentNotFound, DocumentStore
from app.models.query import QueryOptions, SortOrder


class MemoryStore(DocumentStore):
    """Collections are dicts of id -> document; reads and writes copy."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _entity(doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return {"id": doc_id, **copy.deepcopy(data)}

    async def _find(self, name: str, options: QueryOptions) -> List[Dict[str, Any]]:
        records = [self._entity(doc_id, data) for doc_id, data in self._collection(name).items()]
        records = [r for r in records if all(matches_where(r, clause) for clause in options.where)]
        if options.order_by:
            records = sort_by_keys(records, [(o.field, o.direction == SortOrder.DESC) for o in options.order_by])
        if options.limit:
            records = records[:options.limit]
        return records

    async def _get(self, name: str, doc_id: str) -> Dict[str, Any]:
        data = self._collection(name).get(doc_id)
        if data is None:
            raise DocumentNotFound(NOT_FOUND)
        return self._entity(doc_id, data)

    async def _add(self, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        doc_id = uuid.uuid4().hex
        self._collection(name)[doc_id] = copy.deepcopy(data)
        return await self._get(name, doc_id)

    async def _set(self, name: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        self._collection(name)[doc_id] = copy.deepcopy(data)
        return await self._get(name, doc_id)

    async def _update(self, name: str, doc_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        existing = self._collection(name).get(doc_id)
        if existing is None:
            raise DocumentNotFound("Document not found after update")
        existing.update(copy.deepcopy(partial))
        return self._entity(doc_id, existing)

    async def _delete(self, name: str, doc_id: str) -> bool:
        self._collection(name).pop(doc_id, None)
        return True

    def clear(self) -> None:
        self._collections.clear()
