"""
Collection Service
Entity-agnostic CRUD, soft delete and list translation on top of the store
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from app.core import clock
from app.core.filtering import SearchFilter, apply_filters, get_field, sort_records
from app.core.results import ApiResponse, PaginationInfo, fail, ok
from app.db.store import DocumentStore
from app.models.query import BulkResult, CategoryCreate, ListFilters, QueryOptions, SortOrder, WhereClause

logger = logging.getLogger(__name__)


def strip_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) top-level fields before they reach the store."""
    return {k: v for k, v in data.items() if v is not None}


def is_active(record: Dict[str, Any]) -> bool:
    return record.get("is_active") is True


def count_since(records: Iterable[Dict[str, Any]], field: str, since: datetime) -> int:
    total = 0
    for record in records:
        moment = clock.as_utc(get_field(record, field))
        if moment is not None and moment >= since:
            total += 1
    return total


class CollectionService:
    """
    Base class for the domain services.

    Subclasses set the collection name, the filter model, the fields
    searched by free text, the filter attributes that translate directly
    into equality clauses, and the default in-memory sort.
    """
    collection: str = ""
    categories_collection: Optional[str] = None
    entity_name: str = "Document"
    filters_model: Type[ListFilters] = ListFilters
    search_fields: Tuple[str, ...] = ("title",)
    equality_filters: Tuple[str, ...] = ()
    date_field: str = "created_at"
    default_sort: Tuple[str, SortOrder] = ("created_at", SortOrder.DESC)

    def __init__(self, store: DocumentStore):
        self.store = store

    # -- list translation -------------------------------------------------

    def _where(self, filters: ListFilters) -> List[WhereClause]:
        where: List[WhereClause] = []
        if filters.is_active is not None:
            where.append(WhereClause(field="is_active", operator="==", value=filters.is_active))
        elif not filters.include_inactive:
            where.append(WhereClause(field="is_active", operator="==", value=True))

        for name in self.equality_filters:
            value = getattr(filters, name, None)
            if value is not None and value != "":
                where.append(WhereClause(field=name, operator="==", value=value))

        if filters.date_from is not None:
            where.append(WhereClause(field=self.date_field, operator=">=", value=clock.as_utc(filters.date_from)))
        if filters.date_to is not None:
            where.append(WhereClause(field=self.date_field, operator="<=", value=clock.as_utc(filters.date_to)))
        return where

    def _sort(self, records: List[Dict[str, Any]], filters: ListFilters) -> List[Dict[str, Any]]:
        field = filters.sort_by or self.default_sort[0]
        order = filters.sort_order or self.default_sort[1]
        return sort_records(records, field, descending=(order == SortOrder.DESC))

    async def _list(self, filters: Optional[ListFilters] = None,
                    extra_where: Sequence[WhereClause] = ()) -> ApiResponse:
        filters = filters or self.filters_model()
        options = QueryOptions(where=self._where(filters) + list(extra_where), limit=filters.limit)
        result = await self.store.get_collection(self.collection, options)
        if not result.success:
            logger.error("Error getting %s: %s", self.collection, result.error)
            return result

        records = result.data
        if filters.search:
            records = apply_filters(records, [SearchFilter("search", self.search_fields)],
                                    {"search": filters.search})
        records = self._sort(records, filters)
        return ok(records, pagination=PaginationInfo(
            page=1, limit=filters.limit or len(records), total=len(records), total_pages=1
        ))

    async def _prefix_search(self, term: str, fields: Sequence[str]) -> ApiResponse:
        """
        Starts-with search: one `>=` query per field, narrowed to true
        prefix matches, de-duplicated by id, inactive records dropped.
        """
        seen: Dict[str, Dict[str, Any]] = {}
        for field in fields:
            result = await self.store.query_documents(self.collection, field, ">=", term)
            if not result.success:
                logger.warning("Prefix search on %s.%s failed: %s", self.collection, field, result.error)
                continue
            for record in result.data:
                value = get_field(record, field)
                if isinstance(value, str) and value.startswith(term) and is_active(record):
                    seen.setdefault(record["id"], record)
        return ok(list(seen.values()))

    async def _query_active(self, field: str, value: Any) -> ApiResponse:
        result = await self.store.query_documents(self.collection, field, "==", value)
        if not result.success:
            return result
        return ok([r for r in result.data if is_active(r)])

    # -- single document --------------------------------------------------

    async def _get(self, doc_id: str) -> ApiResponse:
        return await self.store.get_document(self.collection, doc_id)

    async def _create(self, payload: Dict[str, Any]) -> ApiResponse:
        now = clock.utcnow()
        data = strip_none({**payload, "created_at": now, "updated_at": now, "is_active": True})
        result = await self.store.add_document(self.collection, data)
        if result.success:
            logger.info("Created %s %s", self.entity_name.lower(), result.data["id"])
        return result

    async def _update(self, doc_id: str, partial: Dict[str, Any]) -> ApiResponse:
        return await self.store.update_document(
            self.collection, doc_id, {**partial, "updated_at": clock.utcnow()}
        )

    async def _soft_delete(self, doc_id: str, **extra: Any) -> ApiResponse:
        return await self._update(doc_id, {"is_active": False, **extra})

    async def _permanent_delete(self, doc_id: str) -> ApiResponse:
        result = await self.store.delete_document(self.collection, doc_id)
        if result.success:
            logger.info("Permanently deleted %s %s", self.entity_name.lower(), doc_id)
        return result

    # -- aggregates -------------------------------------------------------

    async def _stats_population(self) -> ApiResponse:
        """All records split into (active, inactive); recomputed every call."""
        result = await self._list(self.filters_model(include_inactive=True))
        if not result.success:
            return fail(f"Failed to fetch {self.collection} for stats")
        active = [r for r in result.data if is_active(r)]
        inactive = [r for r in result.data if not is_active(r)]
        return ok((active, inactive))

    async def _bulk(self, ids: Sequence[str],
                    operation: Callable[[str], Awaitable[ApiResponse]], message: str) -> ApiResponse:
        """Concurrent per-document updates; successes stay applied when siblings fail."""
        results = await asyncio.gather(*(operation(doc_id) for doc_id in ids))
        errors = [r.error or "unknown error" for r in results if not r.success]
        summary = BulkResult(requested=len(ids), succeeded=len(ids) - len(errors),
                             failed=len(errors), errors=errors)
        if errors:
            logger.warning("%s: %d of %d updates failed", message, len(errors), len(ids))
        return ok(summary, message=message)

    # -- categories -------------------------------------------------------

    async def get_categories(self) -> ApiResponse:
        if not self.categories_collection:
            return fail(f"{self.entity_name} categories are not supported")
        result = await self.store.get_collection(self.categories_collection)
        if not result.success:
            return result
        categories = [c for c in result.data if c.get("is_active") is not False]
        return ok(sort_records(categories, "name"))

    async def create_category(self, form: CategoryCreate) -> ApiResponse:
        if not self.categories_collection:
            return fail(f"{self.entity_name} categories are not supported")
        now = clock.utcnow()
        data = strip_none({**form.model_dump(), "created_at": now, "updated_at": now, "is_active": True})
        return await self.store.add_document(self.categories_collection, data)
