"""
Announcement Service
Company announcements: publishing, pinning, read/like counters and stats
"""
import logging
from typing import List, Optional

from app.core import clock
from app.core.filtering import count_by
from app.core.results import ApiResponse, fail, is_not_found, ok
from app.models.announcement import (
    AnnouncementCreate,
    AnnouncementFilters,
    AnnouncementStats,
    AnnouncementUpdate,
)
from app.models.query import SortOrder, WhereClause
from app.services.base import CollectionService, count_since

logger = logging.getLogger(__name__)

STATUS_CLAUSES = {
    "published": ("is_published", True),
    "draft": ("is_published", False),
    "archived": ("is_archived", True),
    "pinned": ("is_pinned", True),
}


class AnnouncementService(CollectionService):
    collection = "announcements"
    categories_collection = "announcement_categories"
    entity_name = "Announcement"
    filters_model = AnnouncementFilters
    search_fields = ("title", "content", "summary")
    equality_filters = ("type", "priority", "category", "author_id")
    date_field = "publish_date"
    default_sort = ("publish_date", SortOrder.DESC)

    async def get_announcements(self, filters: Optional[AnnouncementFilters] = None) -> ApiResponse:
        filters = filters or AnnouncementFilters()
        extra: List[WhereClause] = []
        if filters.status in STATUS_CLAUSES:
            field, value = STATUS_CLAUSES[filters.status]
            extra.append(WhereClause(field=field, operator="==", value=value))
        return await self._list(filters, extra)

    async def get_announcement(self, announcement_id: str) -> ApiResponse:
        return await self._get(announcement_id)

    async def create_announcement(self, form: AnnouncementCreate) -> ApiResponse:
        payload = form.model_dump()
        payload.update(
            publish_date=form.publish_date or clock.utcnow(),
            read_count=0,
            like_count=0,
            comment_count=0,
            is_archived=False,
        )
        return await self._create(payload)

    async def update_announcement(self, announcement_id: str, form: AnnouncementUpdate) -> ApiResponse:
        return await self._update(announcement_id, form.model_dump(exclude_unset=True))

    async def delete_announcement(self, announcement_id: str) -> ApiResponse:
        return await self._soft_delete(announcement_id)

    async def permanent_delete_announcement(self, announcement_id: str) -> ApiResponse:
        return await self._permanent_delete(announcement_id)

    async def toggle_pin_announcement(self, announcement_id: str, is_pinned: bool) -> ApiResponse:
        return await self._update(announcement_id, {"is_pinned": is_pinned})

    async def toggle_publish_announcement(self, announcement_id: str, is_published: bool) -> ApiResponse:
        partial = {"is_published": is_published}
        if is_published:
            partial["publish_date"] = clock.utcnow()
        return await self._update(announcement_id, partial)

    async def archive_announcement(self, announcement_id: str) -> ApiResponse:
        return await self._update(announcement_id, {"is_archived": True})

    async def _increment(self, announcement_id: str, counter: str) -> ApiResponse:
        current = await self._get(announcement_id)
        if not current.success:
            return fail("Announcement not found") if is_not_found(current) else current
        # Read-modify-write; concurrent increments may be lost
        return await self._update(announcement_id, {counter: (current.data.get(counter) or 0) + 1})

    async def increment_read_count(self, announcement_id: str) -> ApiResponse:
        return await self._increment(announcement_id, "read_count")

    async def increment_like_count(self, announcement_id: str) -> ApiResponse:
        return await self._increment(announcement_id, "like_count")

    async def get_announcement_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, _ = population.data

        published = [a for a in active if a.get("is_published")]
        stats = AnnouncementStats(
            total=len(active),
            published=len(published),
            drafts=len(active) - len(published),
            pinned=sum(1 for a in active if a.get("is_pinned")),
            archived=sum(1 for a in active if a.get("is_archived")),
            today=count_since(active, "created_at", clock.start_of_local_day()),
            by_type=count_by(active, "type"),
            by_priority=count_by(active, "priority"),
            by_category=count_by(active, "category"),
            by_status={"published": len(published), "draft": len(active) - len(published)},
        )
        return ok(stats)
