"""
User Service
Portal user profiles: roles, departments and account status
"""
import logging
from typing import Optional

from app.core.filtering import count_by
from app.core.results import ApiResponse, fail, ok
from app.models.query import SortOrder
from app.models.user import DEFAULT_ROLES, UserCreate, UserFilters, UserStats, UserUpdate
from app.services.base import CollectionService

logger = logging.getLogger(__name__)


class UserService(CollectionService):
    collection = "users"
    entity_name = "User"
    filters_model = UserFilters
    search_fields = ("first_name", "last_name", "email")
    equality_filters = ("role", "department", "status")
    default_sort = ("first_name", SortOrder.ASC)

    async def get_users(self, filters: Optional[UserFilters] = None) -> ApiResponse:
        return await self._list(filters or UserFilters())

    async def get_user(self, user_id: str) -> ApiResponse:
        return await self._get(user_id)

    async def get_user_by_email(self, email: str) -> ApiResponse:
        result = await self._query_active("email", email)
        if not result.success:
            return result
        if not result.data:
            return fail("User not found")
        return ok(result.data[0])

    async def create_user(self, form: UserCreate) -> ApiResponse:
        existing = await self._query_active("email", form.email)
        if existing.success and existing.data:
            return fail("User with this email already exists")
        return await self._create(form.model_dump())

    async def update_user(self, user_id: str, form: UserUpdate) -> ApiResponse:
        return await self._update(user_id, form.model_dump(exclude_unset=True))

    async def delete_user(self, user_id: str) -> ApiResponse:
        return await self._soft_delete(user_id, status="inactive")

    async def permanent_delete_user(self, user_id: str) -> ApiResponse:
        return await self._permanent_delete(user_id)

    async def search_users(self, term: str) -> ApiResponse:
        return await self._prefix_search(term, ("first_name", "email"))

    async def get_users_by_role(self, role: str) -> ApiResponse:
        return await self.get_users(UserFilters(role=role))

    async def get_users_by_department(self, department: str) -> ApiResponse:
        return await self.get_users(UserFilters(department=department))

    async def update_user_status(self, user_id: str, is_active: bool) -> ApiResponse:
        return await self._update(user_id, {
            "is_active": is_active,
            "status": "active" if is_active else "inactive",
        })

    async def get_departments(self) -> ApiResponse:
        result = await self.get_users()
        if not result.success:
            return result
        return ok(sorted({u["department"] for u in result.data if u.get("department")}))

    async def get_roles(self) -> ApiResponse:
        result = await self.get_users()
        if not result.success:
            return result
        found = {u["role"] for u in result.data if u.get("role")}
        return ok(sorted(found.union(DEFAULT_ROLES)))

    async def get_user_stats(self) -> ApiResponse:
        population = await self._stats_population()
        if not population.success:
            return population
        active, inactive = population.data
        return ok(UserStats(
            total=len(active),
            active=len(active),
            inactive=len(inactive),
            by_role=count_by(active, "role"),
            by_department=count_by(active, "department"),
        ))
