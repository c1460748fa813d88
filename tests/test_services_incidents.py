"""
Tests for app/services/incidents.py
"""
import pytest

from app.core.results import NOT_AVAILABLE
from app.db.store import MongoStore
from app.models.incident import IncidentCreate, IncidentFilters, IncidentNoteCreate, IncidentUpdate
from app.models.query import QueryOptions
from app.services.container import build_services
from app.services.incidents import IncidentService


async def make(service: IncidentService, title: str, **fields):
    result = await service.create_incident(IncidentCreate(title=title, **fields), reporter_id="emp-1")
    assert result.success, result.error
    return result.data


class TestIncidentLifecycle:
    """Test reporting and the status workflow."""

    @pytest.mark.asyncio
    async def test_create_stamps_reporter_and_time(self, services, ticking_clock):
        row = await make(services.incidents, "Slippery floor", severity="medium", location="Lobby")

        assert row["reporter_id"] == "emp-1"
        assert row["status"] == "open"
        assert row["notes"] == []
        assert row["attachments"] == []
        assert row["reported_at"] <= row["created_at"]

    @pytest.mark.asyncio
    async def test_resolving_stamps_resolved_at(self, services, ticking_clock):
        svc = services.incidents
        row = await make(svc, "Broken door")

        investigating = await svc.update_incident_status(row["id"], "investigating")
        resolved = await svc.update_incident_status(row["id"], "resolved", "Replaced hinge")

        assert "resolved_at" not in investigating.data
        assert resolved.data["status"] == "resolved"
        assert resolved.data["resolution"] == "Replaced hinge"
        assert resolved.data["resolved_at"] is not None

    @pytest.mark.asyncio
    async def test_add_note_appends(self, services, ticking_clock):
        svc = services.incidents
        row = await make(svc, "Leak")

        first = await svc.add_incident_note(row["id"], IncidentNoteCreate(content="Plumber called", author_id="hr-1"))
        second = await svc.add_incident_note(row["id"], IncidentNoteCreate(content="Fixed", author_id="hr-1", is_internal=True))
        stored = await svc.get_incident_by_id(row["id"])

        assert first.data["id"] != second.data["id"]
        assert [n["content"] for n in stored.data["notes"]] == ["Plumber called", "Fixed"]
        assert stored.data["notes"][1]["is_internal"] is True

    @pytest.mark.asyncio
    async def test_note_on_missing_incident(self, services, ticking_clock):
        result = await services.incidents.add_incident_note("missing", IncidentNoteCreate(content="x", author_id="a"))
        assert not result.success
        assert result.error == "Incident not found"

    @pytest.mark.asyncio
    async def test_note_when_store_unavailable(self):
        services = build_services(MongoStore(None))
        result = await services.incidents.add_incident_note("i1", IncidentNoteCreate(content="x", author_id="a"))
        assert result.error == NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_permanent_delete(self, services, store, ticking_clock):
        """Gone from by-id reads, default lists and include-inactive lists."""
        svc = services.incidents
        row = await make(svc, "Temp")
        await make(svc, "Keep")

        await svc.permanent_delete_incident(row["id"])

        assert not (await svc.get_incident_by_id(row["id"])).success
        for filters in (IncidentFilters(), IncidentFilters(include_inactive=True)):
            listed = await svc.get_incidents(filters)
            assert row["id"] not in [i["id"] for i in listed.data]
        raw = await store.get_collection("incidents", QueryOptions())
        assert len(raw.data) == 1

    @pytest.mark.asyncio
    async def test_update_keeps_other_fields(self, services, ticking_clock):
        svc = services.incidents
        row = await make(svc, "Noise", location="Floor 2")

        updated = await svc.update_incident(row["id"], IncidentUpdate(severity="high"))

        assert updated.data["severity"] == "high"
        assert updated.data["location"] == "Floor 2"
        assert updated.data["updated_at"] > row["updated_at"]


class TestIncidentQueries:

    @pytest.mark.asyncio
    async def test_filters_are_conjunctive(self, services, ticking_clock):
        svc = services.incidents
        await make(svc, "a", severity="high", category="it")
        await make(svc, "b", severity="high", category="safety")
        await make(svc, "c", severity="low", category="it")

        result = await svc.get_incidents(IncidentFilters(severity="high", category="it"))
        assert [i["title"] for i in result.data] == ["a"]

    @pytest.mark.asyncio
    async def test_search_covers_location(self, services, ticking_clock):
        svc = services.incidents
        await make(svc, "Water", location="Basement")
        await make(svc, "Fire", location="Kitchen")

        result = await svc.get_incidents(IncidentFilters(search="base"))
        assert [i["title"] for i in result.data] == ["Water"]

    @pytest.mark.asyncio
    async def test_stats(self, services, ticking_clock):
        svc = services.incidents
        a = await make(svc, "a", severity="critical", priority="urgent")
        await make(svc, "b", severity="high")
        c = await make(svc, "c", severity="low")
        await svc.update_incident_status(a["id"], "resolved")
        await svc.update_incident_status(c["id"], "closed")
        gone = await make(svc, "d")
        await svc.delete_incident(gone["id"])

        stats = (await svc.get_incident_stats()).data

        assert stats.total == 3
        assert (stats.open, stats.resolved, stats.closed) == (1, 1, 1)
        assert (stats.critical, stats.high, stats.low) == (1, 1, 1)
        assert stats.urgent == 1
        assert stats.today == 3
        assert stats.resolved_today == 1
        assert sum(stats.by_status.values()) == stats.total
        assert sum(stats.by_severity.values()) == stats.total
