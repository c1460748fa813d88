"""
Incident Routes
Reporting, triage and resolution of workplace incidents
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import csv_download, get_current_user, get_services, paged, require_roles, unwrap
from app.config import settings
from app.models.incident import (
    IncidentCreate,
    IncidentFilters,
    IncidentNoteCreate,
    IncidentStatusUpdate,
    IncidentUpdate,
)
from app.models.query import CategoryCreate
from app.services.container import Services

router = APIRouter()


@router.get("/")
async def get_incidents(
    filters: IncidentFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return paged(await services.incidents.get_incidents(filters), page, page_size)


@router.get("/stats")
async def get_incident_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.incidents.get_incident_stats())


@router.get("/categories")
async def get_categories(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.incidents.get_categories())


@router.post("/categories")
async def create_category(
    data: CategoryCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.incidents.create_category(data))


@router.get("/export")
async def export_incidents(
    filters: IncidentFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr", "manager")),
):
    return csv_download(await services.incidents.get_incidents(filters), "incidents")


@router.get("/{incident_id}")
async def get_incident(
    incident_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.incidents.get_incident_by_id(incident_id))


@router.post("/")
async def report_incident(
    data: IncidentCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Any signed-in user may report an incident"""
    return unwrap(await services.incidents.create_incident(data, reporter_id=current_user["id"]))


@router.put("/{incident_id}")
async def update_incident(
    incident_id: str,
    data: IncidentUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr", "manager")),
):
    return unwrap(await services.incidents.update_incident(incident_id, data))


@router.put("/{incident_id}/status")
async def update_incident_status(
    incident_id: str,
    data: IncidentStatusUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr", "manager")),
):
    """Move an incident through its workflow; resolving stamps resolved_at"""
    return unwrap(await services.incidents.update_incident_status(incident_id, data.status, data.resolution))


@router.post("/{incident_id}/notes")
async def add_incident_note(
    incident_id: str,
    data: IncidentNoteCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.incidents.add_incident_note(incident_id, data))


@router.delete("/{incident_id}")
async def delete_incident(
    incident_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.incidents.delete_incident(incident_id))
    return {"message": "Incident removed"}


@router.delete("/{incident_id}/permanent")
async def permanent_delete_incident(
    incident_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.incidents.permanent_delete_incident(incident_id))
    return {"message": "Incident deleted"}
