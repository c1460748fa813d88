"""
Employee Routes
Employee directory endpoints
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import csv_download, get_current_user, get_services, paged, require_roles, unwrap
from app.config import settings
from app.models.employee import EmployeeContactUpdate, EmployeeCreate, EmployeeFilters, EmployeeUpdate
from app.services.container import Services

router = APIRouter()


@router.get("/")
async def get_employees(
    filters: EmployeeFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return paged(await services.employees.get_employees(filters), page, page_size)


@router.get("/search")
async def search_employees(
    term: str = Query(..., min_length=1),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Prefix search on name and employee code"""
    return unwrap(await services.employees.search_employees(term))


@router.get("/stats")
async def get_employee_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr", "manager")),
):
    return unwrap(await services.employees.get_employee_stats())


@router.get("/departments")
async def get_departments(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.employees.get_departments())


@router.get("/designations")
async def get_designations(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.employees.get_designations())


@router.get("/export")
async def export_employees(
    filters: EmployeeFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return csv_download(await services.employees.get_employees(filters), "employees")


@router.get("/department/{department}")
async def get_employees_by_department(
    department: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.employees.get_employees_by_department(department))


@router.get("/code/{employee_code}")
async def get_employee_by_code(
    employee_code: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.employees.get_employee_by_employee_id(employee_code))


@router.get("/{employee_id}")
async def get_employee(
    employee_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.employees.get_employee(employee_id))


@router.post("/")
async def create_employee(
    employee_data: EmployeeCreate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """
    Create a new employee (Admin/HR only)
    """
    return unwrap(await services.employees.create_employee(employee_data))


@router.put("/{employee_id}")
async def update_employee(
    employee_id: str,
    update_data: EmployeeUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.employees.update_employee(employee_id, update_data))


@router.put("/{employee_id}/contact")
async def update_employee_contact(
    employee_id: str,
    contact: EmployeeContactUpdate,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.employees.update_employee_contact(employee_id, contact))


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """Mark an employee as resigned"""
    unwrap(await services.employees.delete_employee(employee_id))
    return {"message": "Employee marked as resigned"}


@router.delete("/{employee_id}/permanent")
async def permanent_delete_employee(
    employee_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin")),
):
    unwrap(await services.employees.permanent_delete_employee(employee_id))
    return {"message": "Employee deleted"}
