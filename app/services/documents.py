"""
Document Service
Document records with the file content stored inline as a base64 data URL
"""
import base64
import logging
from typing import Any, Dict, Optional

from app.core import clock
from app.core.filtering import count_by
from app.core.results import ApiResponse, ok
from app.models.document import (
    DEFAULT_DOCUMENT_TYPES,
    DocumentCreate,
    DocumentFilters,
    DocumentStats,
    DocumentUpdate,
    FileUpload,
)
from app.models.query import SortOrder
from app.services.base import CollectionService

logger = logging.getLogger(__name__)


def to_data_url(file: FileUpload) -> str:
    encoded = base64.b64encode(file.content).decode("ascii")
    return f"data:{file.file_type};base64,{encoded}"


def file_fields(file: FileUpload) -> Dict[str, Any]:
    return {
        "file_name": file.file_name,
        "file_size": file.file_size,
        "file_type": file.file_type,
        "file_data": to_data_url(file),
    }


def is_expired(record: Dict[str, Any], now) -> bool:
    expiry = clock.as_utc(record.get("expiry_date"))
    return expiry is not None and expiry < now


class DocumentService(CollectionService):
    collection = "documents"
    entity_name = "Document"
    filters_model = DocumentFilters
    search_fields = ("title", "category", "description")
    equality_filters = ("type", "category", "access_level", "uploaded_by")
    date_field = "uploaded_at"
    default_sort = ("uploaded_at", SortOrder.DESC)

    async def get_documents(self, filters: Optional[DocumentFilters] = None) -> ApiResponse:
        return await self._list(filters or DocumentFilters())

    async def get_document(self, document_id: str) -> ApiResponse:
        return await self._get(document_id)

    async def create_document(self, form: DocumentCreate, file: Optional[FileUpload] = None) -> ApiResponse:
        payload = form.model_dump()
        payload.update(uploaded_at=clock.utcnow(), version=1)
        if file is not None:
            payload.update(file_fields(file))
        return await self._create(payload)

    async def update_document(self, document_id: str, form: DocumentUpdate,
                              file: Optional[FileUpload] = None) -> ApiResponse:
        partial = form.model_dump(exclude_unset=True)
        if file is not None:
            current = await self._get(document_id)
            if not current.success:
                return current
            partial.update(file_fields(file))
            partial["version"] = (current.data.get("version") or 1) + 1
        return await self._update(document_id, partial)

    async def delete_document(self, document_id: str) -> ApiResponse:
        return await self._soft_delete(document_id)

    async def permanent_delete_document(self, document_id: str) -> ApiResponse:
        return await self._permanent_delete(document_id)

    async def search_documents(self, term: str) -> ApiResponse:
        return await self._prefix_search(term, ("title", "category"))

    async def get_documents_by_type(self, document_type: str) -> ApiResponse:
        return await self.get_documents(DocumentFilters(type=document_type))

    async def get_documents_by_category(self, category: str) -> ApiResponse:
        return await self.get_documents(DocumentFilters(category=category))

    async def get_expired_documents(self) -> ApiResponse:
        result = await self.get_documents()
        if not result.success:
            return result
        now = clock.utcnow()
        return ok([d for d in result.data if is_expired(d, now)])

    async def update_document_access_level(self, document_id: str, access_level: str) -> ApiResponse:
        return await self._update(document_id, {"access_level": access_level})

    async def get_categories(self) -> ApiResponse:
        """Distinct categories in use, sorted."""
        result = await self.get_documents()
        if not result.success:
            return result
        return ok(sorted({d["category"] for d in result.data if d.get("category")}))

    async def get_document_types(self) -> ApiResponse:
        result = await self.get_documents()
        if not result.success:
            return result
        found = {d["type"] for d in result.data if d.get("type")}
        return ok(sorted(found.union(DEFAULT_DOCUMENT_TYPES)))

    async def get_document_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, inactive = population.data

        now = clock.utcnow()
        stats = DocumentStats(
            total=len(active),
            active=len(active),
            inactive=len(inactive),
            expired=sum(1 for d in active if is_expired(d, now)),
            by_type=count_by(active, "type"),
            by_category=count_by(active, "category"),
            by_access_level=count_by(active, "access_level"),
        )
        return ok(stats)
