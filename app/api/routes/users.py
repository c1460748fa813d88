"""
User Routes
Portal user administration
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import csv_download, get_services, paged, require_roles, unwrap
from app.config import settings
from app.models.query import FlagUpdate
from app.models.user import UserCreate, UserFilters, UserUpdate
from app.services.container import Services

router = APIRouter()


@router.get("/")
async def get_users(
    filters: UserFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return paged(await services.users.get_users(filters), page, page_size)


@router.get("/search")
async def search_users(
    term: str = Query(..., min_length=1),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.search_users(term))


@router.get("/stats")
async def get_user_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_user_stats())


@router.get("/departments")
async def get_departments(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_departments())


@router.get("/roles")
async def get_roles(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_roles())


@router.get("/export")
async def export_users(
    filters: UserFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return csv_download(await services.users.get_users(filters), "users")


@router.get("/by-email")
async def get_user_by_email(
    email: str = Query(...),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_user_by_email(email))


@router.get("/role/{role}")
async def get_users_by_role(
    role: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_users_by_role(role))


@router.get("/department/{department}")
async def get_users_by_department(
    department: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_users_by_department(department))


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.get_user(user_id))


@router.post("/")
async def create_user(
    data: UserCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin")),
):
    return unwrap(await services.users.create_user(data))


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    data: UserUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.users.update_user(user_id, data))


@router.put("/{user_id}/status")
async def update_user_status(
    user_id: str,
    data: FlagUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin")),
):
    """Activate or deactivate an account"""
    return unwrap(await services.users.update_user_status(user_id, data.value))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin")),
):
    unwrap(await services.users.delete_user(user_id))
    return {"message": "User deactivated"}


@router.delete("/{user_id}/permanent")
async def permanent_delete_user(
    user_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin")),
):
    unwrap(await services.users.permanent_delete_user(user_id))
    return {"message": "User deleted"}
