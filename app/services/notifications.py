"""
Notification Service
Per-recipient notifications with read/pin/archive flags and bulk actions
"""
import logging
from typing import List, Optional

from app.core import clock
from app.core.filtering import count_by, sort_records
from app.core.results import ApiResponse, fail, ok
from app.models.notification import (
    NotificationCreate,
    NotificationFilters,
    NotificationStats,
    NotificationUpdate,
)
from app.models.query import SortOrder, WhereClause
from app.services.base import CollectionService, count_since

logger = logging.getLogger(__name__)


class NotificationService(CollectionService):
    collection = "notifications"
    categories_collection = "notification_categories"
    entity_name = "Notification"
    filters_model = NotificationFilters
    search_fields = ("title", "message", "category")
    equality_filters = ("type", "priority", "category", "recipient_id", "is_pinned")
    default_sort = ("created_at", SortOrder.DESC)

    async def get_notifications(self, filters: Optional[NotificationFilters] = None) -> ApiResponse:
        filters = filters or NotificationFilters()
        extra: List[WhereClause] = []
        if filters.read_status in ("read", "unread"):
            extra.append(WhereClause(field="is_read", operator="==", value=filters.read_status == "read"))
        return await self._list(filters, extra)

    async def get_notification(self, notification_id: str) -> ApiResponse:
        return await self._get(notification_id)

    async def create_notification(self, form: NotificationCreate, sender_id: Optional[str] = None) -> ApiResponse:
        payload = form.model_dump()
        payload.update(sender_id=sender_id, is_read=False, is_pinned=False, is_archived=False)
        return await self._create(payload)

    async def update_notification(self, notification_id: str, form: NotificationUpdate) -> ApiResponse:
        return await self._update(notification_id, form.model_dump(exclude_unset=True))

    async def delete_notification(self, notification_id: str) -> ApiResponse:
        return await self._soft_delete(notification_id)

    async def permanent_delete_notification(self, notification_id: str) -> ApiResponse:
        return await self._permanent_delete(notification_id)

    async def mark_as_read(self, notification_id: str) -> ApiResponse:
        return await self._update(notification_id, {"is_read": True, "read_at": clock.utcnow()})

    async def mark_as_unread(self, notification_id: str) -> ApiResponse:
        return await self._update(notification_id, {"is_read": False, "read_at": None})

    async def toggle_pin(self, notification_id: str, is_pinned: bool) -> ApiResponse:
        return await self._update(notification_id, {"is_pinned": is_pinned})

    async def archive_notification(self, notification_id: str) -> ApiResponse:
        return await self._update(notification_id, {"is_archived": True})

    async def search_notifications(self, term: str, filters: Optional[NotificationFilters] = None) -> ApiResponse:
        filters = filters or NotificationFilters()
        return await self.get_notifications(filters.model_copy(update={"search": term}))

    async def get_recipients(self) -> ApiResponse:
        """Active users that can be picked as recipients."""
        result = await self.store.get_collection("users")
        if not result.success:
            return fail("Failed to fetch users")
        users = [u for u in result.data if u.get("is_active") is not False]
        return ok(sort_records(users, "first_name"))

    async def mark_all_as_read(self) -> ApiResponse:
        result = await self.get_notifications()
        if not result.success:
            return result
        unread = [n["id"] for n in result.data if not n.get("is_read")]
        return await self._bulk(unread, self.mark_as_read, "All notifications marked as read")

    async def archive_all(self) -> ApiResponse:
        result = await self.get_notifications()
        if not result.success:
            return result
        pending = [n["id"] for n in result.data if not n.get("is_archived")]
        return await self._bulk(pending, self.archive_notification, "All notifications archived")

    async def get_notification_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, _ = population.data

        unread = sum(1 for n in active if not n.get("is_read"))
        stats = NotificationStats(
            total=len(active),
            unread=unread,
            pinned=sum(1 for n in active if n.get("is_pinned")),
            today=count_since(active, "created_at", clock.start_of_local_day()),
            by_type=count_by(active, "type"),
            by_priority=count_by(active, "priority"),
            by_category=count_by(active, "category"),
            by_status={"read": len(active) - unread, "unread": unread},
        )
        return ok(stats)
