"""
Employee Service
Employee directory records; deleting an employee marks them resigned
"""
import logging
from typing import Optional

from app.core import clock
from app.core.filtering import count_by
from app.core.results import ApiResponse, fail, ok
from app.models.employee import (
    EmployeeContactUpdate,
    EmployeeCreate,
    EmployeeFilters,
    EmployeeStats,
    EmployeeUpdate,
)
from app.models.query import SortOrder
from app.services.base import CollectionService

logger = logging.getLogger(__name__)


class EmployeeService(CollectionService):
    collection = "employees"
    entity_name = "Employee"
    filters_model = EmployeeFilters
    search_fields = ("employee_name", "employee_id", "email")
    equality_filters = ("department", "designation", "resigned")
    date_field = "joining_date"
    default_sort = ("employee_name", SortOrder.ASC)

    async def get_employees(self, filters: Optional[EmployeeFilters] = None) -> ApiResponse:
        return await self._list(filters or EmployeeFilters())

    async def get_employee(self, employee_id: str) -> ApiResponse:
        return await self._get(employee_id)

    async def get_employee_by_employee_id(self, code: str) -> ApiResponse:
        result = await self._query_active("employee_id", code)
        if not result.success:
            return result
        if not result.data:
            return fail("Employee not found")
        return ok(result.data[0])

    async def create_employee(self, form: EmployeeCreate) -> ApiResponse:
        existing = await self._query_active("employee_id", form.employee_id)
        if existing.success and existing.data:
            return fail("Employee ID already exists")
        payload = form.model_dump()
        payload["resigned"] = False
        return await self._create(payload)

    async def update_employee(self, employee_id: str, form: EmployeeUpdate) -> ApiResponse:
        return await self._update(employee_id, form.model_dump(exclude_unset=True))

    async def delete_employee(self, employee_id: str) -> ApiResponse:
        return await self._soft_delete(employee_id, resigned=True, resigned_at=clock.utcnow())

    async def permanent_delete_employee(self, employee_id: str) -> ApiResponse:
        return await self._permanent_delete(employee_id)

    async def search_employees(self, term: str) -> ApiResponse:
        return await self._prefix_search(term, ("employee_name", "employee_id"))

    async def get_employees_by_department(self, department: str) -> ApiResponse:
        return await self.get_employees(EmployeeFilters(department=department))

    async def update_employee_contact(self, employee_id: str, contact: EmployeeContactUpdate) -> ApiResponse:
        return await self._update(employee_id, contact.model_dump(exclude_none=True))

    async def get_departments(self) -> ApiResponse:
        result = await self.get_employees(EmployeeFilters(resigned=False))
        if not result.success:
            return result
        return ok(sorted({e["department"] for e in result.data if e.get("department")}))

    async def get_designations(self) -> ApiResponse:
        result = await self.get_employees(EmployeeFilters(resigned=False))
        if not result.success:
            return result
        return ok(sorted({e["designation"] for e in result.data if e.get("designation")}))

    async def get_employee_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, inactive = population.data

        working = [e for e in active if not e.get("resigned")]
        return ok(EmployeeStats(
            total=len(active),
            active=len(working),
            resigned=sum(1 for e in active + inactive if e.get("resigned")),
            by_department=count_by(active, "department"),
            by_designation=count_by(active, "designation"),
        ))
