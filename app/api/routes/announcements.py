"""
Announcement Routes
Endpoints for managing company announcements
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import csv_download, get_current_user, get_services, paged, require_roles, unwrap
from app.config import settings
from app.models.announcement import (
    AnnouncementCreate,
    AnnouncementFilters,
    AnnouncementUpdate,
)
from app.models.query import CategoryCreate, FlagUpdate
from app.services.container import Services

router = APIRouter()


@router.get("/")
async def get_announcements(
    filters: AnnouncementFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Get active announcements, newest first"""
    return paged(await services.announcements.get_announcements(filters), page, page_size)


@router.get("/stats")
async def get_announcement_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.announcements.get_announcement_stats())


@router.get("/categories")
async def get_categories(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.announcements.get_categories())


@router.post("/categories")
async def create_category(
    data: CategoryCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.announcements.create_category(data))


@router.get("/export")
async def export_announcements(
    filters: AnnouncementFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Download the filtered announcements as CSV"""
    return csv_download(await services.announcements.get_announcements(filters), "announcements")


@router.get("/{id}")
async def get_announcement(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.announcements.get_announcement(id))


@router.post("/")
async def create_announcement(
    data: AnnouncementCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """Create a new announcement (Admin/HR only)"""
    if data.author_id is None:
        data.author_id = current_user["id"]
        data.author_name = f"{current_user.get('first_name', '')} {current_user.get('last_name', '')}".strip()
    return unwrap(await services.announcements.create_announcement(data))


@router.put("/{id}")
async def update_announcement(
    id: str,
    data: AnnouncementUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.announcements.update_announcement(id, data))


@router.post("/{id}/pin")
async def toggle_pin(
    id: str,
    data: FlagUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.announcements.toggle_pin_announcement(id, data.value))


@router.post("/{id}/publish")
async def toggle_publish(
    id: str,
    data: FlagUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """Publish or unpublish; publishing moves the publish date to now"""
    return unwrap(await services.announcements.toggle_publish_announcement(id, data.value))


@router.post("/{id}/archive")
async def archive_announcement(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.announcements.archive_announcement(id))


@router.post("/{id}/read")
async def mark_read(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.announcements.increment_read_count(id))


@router.post("/{id}/like")
async def like_announcement(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.announcements.increment_like_count(id))


@router.delete("/{id}")
async def delete_announcement(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """Deactivate an announcement"""
    unwrap(await services.announcements.delete_announcement(id))
    return {"message": "Announcement removed"}


@router.delete("/{id}/permanent")
async def permanent_delete_announcement(
    id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.announcements.permanent_delete_announcement(id))
    return {"message": "Announcement deleted"}
