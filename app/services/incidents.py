"""
Incident Service
Workplace incident reports, status workflow and embedded notes
"""
import logging
import uuid
from typing import Optional

from app.core import clock
from app.core.filtering import count_by
from app.core.results import ApiResponse, fail, is_not_found, ok
from app.models.incident import (
    IncidentCreate,
    IncidentFilters,
    IncidentNoteCreate,
    IncidentStats,
    IncidentStatus,
    IncidentUpdate,
)
from app.models.query import SortOrder
from app.services.base import CollectionService, count_since

logger = logging.getLogger(__name__)

CLOSING_STATUSES = (IncidentStatus.RESOLVED.value, IncidentStatus.CLOSED.value)


class IncidentService(CollectionService):
    collection = "incidents"
    categories_collection = "incident_categories"
    entity_name = "Incident"
    filters_model = IncidentFilters
    search_fields = ("title", "description", "location")
    equality_filters = ("category", "severity", "status", "priority", "assignee_id")
    date_field = "reported_at"
    default_sort = ("reported_at", SortOrder.DESC)

    async def get_incidents(self, filters: Optional[IncidentFilters] = None) -> ApiResponse:
        return await self._list(filters or IncidentFilters())

    async def get_incident_by_id(self, incident_id: str) -> ApiResponse:
        return await self._get(incident_id)

    async def create_incident(self, form: IncidentCreate, reporter_id: Optional[str] = None) -> ApiResponse:
        payload = form.model_dump()
        payload.update(
            reporter_id=reporter_id,
            reported_at=clock.utcnow(),
            attachments=[],
            notes=[],
        )
        return await self._create(payload)

    async def update_incident(self, incident_id: str, form: IncidentUpdate) -> ApiResponse:
        return await self._update(incident_id, form.model_dump(exclude_unset=True))

    async def delete_incident(self, incident_id: str) -> ApiResponse:
        return await self._soft_delete(incident_id)

    async def permanent_delete_incident(self, incident_id: str) -> ApiResponse:
        return await self._permanent_delete(incident_id)

    async def update_incident_status(self, incident_id: str, status: str,
                                     resolution: Optional[str] = None) -> ApiResponse:
        partial = {"status": status}
        if status in CLOSING_STATUSES:
            partial["resolved_at"] = clock.utcnow()
            if resolution:
                partial["resolution"] = resolution
        return await self._update(incident_id, partial)

    async def add_incident_note(self, incident_id: str, note: IncidentNoteCreate) -> ApiResponse:
        """Append a note to the incident; returns the stored note."""
        current = await self._get(incident_id)
        if not current.success:
            return fail("Incident not found") if is_not_found(current) else current

        new_note = {"id": uuid.uuid4().hex, **note.model_dump(), "created_at": clock.utcnow()}
        notes = list(current.data.get("notes") or []) + [new_note]
        result = await self._update(incident_id, {"notes": notes})
        if not result.success:
            return result
        return ok(new_note)

    async def get_incident_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, _ = population.data

        def having(field, value):
            return sum(1 for i in active if i.get(field) == value)

        today = clock.start_of_local_day()
        resolved = [i for i in active if i.get("status") == IncidentStatus.RESOLVED.value]
        stats = IncidentStats(
            total=len(active),
            open=having("status", "open"),
            investigating=having("status", "investigating"),
            resolved=len(resolved),
            closed=having("status", "closed"),
            critical=having("severity", "critical"),
            high=having("severity", "high"),
            medium=having("severity", "medium"),
            low=having("severity", "low"),
            urgent=having("priority", "urgent"),
            today=count_since(active, "reported_at", today),
            resolved_today=count_since(resolved, "resolved_at", today),
            by_category=count_by(active, "category"),
            by_severity=count_by(active, "severity"),
            by_status=count_by(active, "status"),
            by_priority=count_by(active, "priority"),
        )
        return ok(stats)
