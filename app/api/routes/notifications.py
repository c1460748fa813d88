"""
Notification Routes
Alerts with read-tracking, pinning and bulk actions
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import csv_download, get_current_user, get_services, paged, require_roles, unwrap
from app.config import settings
from app.models.notification import NotificationCreate, NotificationFilters, NotificationUpdate
from app.models.query import CategoryCreate, FlagUpdate
from app.services.container import Services

router = APIRouter()


@router.get("/")
async def get_notifications(
    filters: NotificationFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return paged(await services.notifications.get_notifications(filters), page, page_size)


@router.get("/search")
async def search_notifications(
    term: str = Query(..., min_length=1),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Case-insensitive search over title, message and category"""
    return unwrap(await services.notifications.search_notifications(term))


@router.get("/stats")
async def get_notification_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.get_notification_stats())


@router.get("/categories")
async def get_categories(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.get_categories())


@router.post("/categories")
async def create_category(
    data: CategoryCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.notifications.create_category(data))


@router.get("/recipients")
async def get_recipients(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.notifications.get_recipients())


@router.get("/export")
async def export_notifications(
    filters: NotificationFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return csv_download(await services.notifications.get_notifications(filters), "notifications")


@router.put("/read-all")
async def mark_all_as_read(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Mark all notifications as read; reports per-notification failures"""
    return unwrap(await services.notifications.mark_all_as_read())


@router.put("/archive-all")
async def archive_all(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.notifications.archive_all())


@router.get("/{notification_id}")
async def get_notification(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.get_notification(notification_id))


@router.post("/")
async def create_notification(
    data: NotificationCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.notifications.create_notification(data, sender_id=current_user["id"]))


@router.put("/{notification_id}")
async def update_notification(
    notification_id: str,
    data: NotificationUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.notifications.update_notification(notification_id, data))


@router.put("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.mark_as_read(notification_id))


@router.put("/{notification_id}/unread")
async def mark_as_unread(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.mark_as_unread(notification_id))


@router.post("/{notification_id}/pin")
async def toggle_pin(
    notification_id: str,
    data: FlagUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.toggle_pin(notification_id, data.value))


@router.put("/{notification_id}/archive")
async def archive_notification(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.notifications.archive_notification(notification_id))


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.notifications.delete_notification(notification_id))
    return {"message": "Notification removed"}


@router.delete("/{notification_id}/permanent")
async def permanent_delete_notification(
    notification_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.notifications.permanent_delete_notification(notification_id))
    return {"message": "Notification deleted"}
