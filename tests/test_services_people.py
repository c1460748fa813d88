"""
Tests for app/services/users.py and app/services/employees.py
"""
import pytest

from app.models.employee import ContactInfo, EmployeeContactUpdate, EmployeeCreate, EmployeeFilters, EmployeeUpdate
from app.models.user import EmergencyContact, UserCreate, UserFilters, UserUpdate


async def make_user(services, first_name, **fields):
    fields.setdefault("email", f"{first_name.lower()}@company.com")
    result = await services.users.create_user(UserCreate(first_name=first_name, **fields))
    assert result.success, result.error
    return result.data


async def make_employee(services, code, name, **fields):
    result = await services.employees.create_employee(EmployeeCreate(employee_id=code, employee_name=name, **fields))
    assert result.success, result.error
    return result.data


class TestUserService:
    """Test user profile operations."""

    @pytest.mark.asyncio
    async def test_sorted_by_first_name(self, services, ticking_clock):
        for name in ("Zara", "Adam", "Mia"):
            await make_user(services, name)

        result = await services.users.get_users()
        assert [u["first_name"] for u in result.data] == ["Adam", "Mia", "Zara"]

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, services, ticking_clock):
        await make_user(services, "Adam")
        result = await services.users.create_user(UserCreate(first_name="Other", email="adam@company.com"))

        assert not result.success
        assert result.error == "User with this email already exists"

    @pytest.mark.asyncio
    async def test_get_by_email(self, services, ticking_clock):
        user = await make_user(services, "Adam")

        found = await services.users.get_user_by_email("adam@company.com")
        missing = await services.users.get_user_by_email("nobody@company.com")

        assert found.data["id"] == user["id"]
        assert missing.error == "User not found"

    @pytest.mark.asyncio
    async def test_soft_delete_sets_inactive_status(self, services, ticking_clock):
        user = await make_user(services, "Adam")

        result = await services.users.delete_user(user["id"])

        assert result.data["is_active"] is False
        assert result.data["status"] == "inactive"
        assert (await services.users.get_users()).data == []

    @pytest.mark.asyncio
    async def test_update_status_toggle(self, services, ticking_clock):
        user = await make_user(services, "Adam")

        off = await services.users.update_user_status(user["id"], False)
        on = await services.users.update_user_status(user["id"], True)

        assert (off.data["is_active"], off.data["status"]) == (False, "inactive")
        assert (on.data["is_active"], on.data["status"]) == (True, "active")

    @pytest.mark.asyncio
    async def test_update_nested_contact(self, services, ticking_clock):
        user = await make_user(services, "Adam")
        contact = EmergencyContact(name="Eve", phone="555", relationship="Sister")

        result = await services.users.update_user(user["id"], UserUpdate(emergency_contact=contact))

        assert result.data["emergency_contact"] == {"name": "Eve", "phone": "555", "relationship": "Sister"}

    @pytest.mark.asyncio
    async def test_prefix_search(self, services, ticking_clock):
        await make_user(services, "Adam", email="a.smith@company.com")
        await make_user(services, "Adrian", email="adrian@company.com")
        await make_user(services, "Bea", email="adx@company.com")

        result = await services.users.search_users("Ad")
        assert sorted(u["first_name"] for u in result.data) == ["Adam", "Adrian"]

    @pytest.mark.asyncio
    async def test_role_and_department_queries(self, services, ticking_clock):
        await make_user(services, "Adam", role="hr", department="People")
        await make_user(services, "Bea", role="employee", department="Engineering")
        await make_user(services, "Cy", role="employee", department="People")

        by_role = await services.users.get_users_by_role("employee")
        by_dept = await services.users.get_users_by_department("People")
        both = await services.users.get_users(UserFilters(role="employee", department="People"))

        assert [u["first_name"] for u in by_role.data] == ["Bea", "Cy"]
        assert [u["first_name"] for u in by_dept.data] == ["Adam", "Cy"]
        assert [u["first_name"] for u in both.data] == ["Cy"]

    @pytest.mark.asyncio
    async def test_departments_roles_and_stats(self, services, ticking_clock):
        await make_user(services, "Adam", role="admin", department="Ops")
        await make_user(services, "Bea", department="Engineering")
        gone = await make_user(services, "Cy", department="Sales")
        await services.users.delete_user(gone["id"])

        departments = await services.users.get_departments()
        roles = await services.users.get_roles()
        stats = (await services.users.get_user_stats()).data

        assert departments.data == ["Engineering", "Ops"]
        assert roles.data == ["admin", "employee", "hr", "manager"]
        assert (stats.total, stats.active, stats.inactive) == (2, 2, 1)
        assert sum(stats.by_role.values()) == stats.total


class TestEmployeeService:
    """Test the employee directory."""

    @pytest.mark.asyncio
    async def test_create_and_lookup_by_code(self, services, ticking_clock):
        emp = await make_employee(services, "EMP001", "John Doe", department="Engineering")

        found = await services.employees.get_employee_by_employee_id("EMP001")

        assert emp["resigned"] is False
        assert found.data["id"] == emp["id"]

    @pytest.mark.asyncio
    async def test_duplicate_code_rejected(self, services, ticking_clock):
        await make_employee(services, "EMP001", "John Doe")
        result = await services.employees.create_employee(EmployeeCreate(employee_id="EMP001", employee_name="Jane"))

        assert not result.success
        assert result.error == "Employee ID already exists"

    @pytest.mark.asyncio
    async def test_delete_marks_resigned(self, services, ticking_clock):
        emp = await make_employee(services, "EMP001", "John Doe")

        result = await services.employees.delete_employee(emp["id"])

        assert result.data["resigned"] is True
        assert result.data["resigned_at"] is not None
        assert result.data["is_active"] is False
        assert (await services.employees.get_employees()).data == []

    @pytest.mark.asyncio
    async def test_sorted_by_name_and_filtered(self, services, ticking_clock):
        await make_employee(services, "E2", "Zed", department="Ops", designation="Lead")
        await make_employee(services, "E1", "Amy", department="Ops", designation="Analyst")
        await make_employee(services, "E3", "Bob", department="HR", designation="Lead")

        everyone = await services.employees.get_employees()
        ops_leads = await services.employees.get_employees(EmployeeFilters(department="Ops", designation="Lead"))
        by_dept = await services.employees.get_employees_by_department("Ops")

        assert [e["employee_name"] for e in everyone.data] == ["Amy", "Bob", "Zed"]
        assert [e["employee_name"] for e in ops_leads.data] == ["Zed"]
        assert [e["employee_name"] for e in by_dept.data] == ["Amy", "Zed"]

    @pytest.mark.asyncio
    async def test_search_by_name_or_code(self, services, ticking_clock):
        await make_employee(services, "EMP100", "Maria")
        await make_employee(services, "MGR001", "Zoe")

        by_name = await services.employees.search_employees("Mar")
        by_code = await services.employees.search_employees("MGR")

        assert [e["employee_name"] for e in by_name.data] == ["Maria"]
        assert [e["employee_name"] for e in by_code.data] == ["Zoe"]

    @pytest.mark.asyncio
    async def test_update_contact(self, services, ticking_clock):
        emp = await make_employee(services, "EMP001", "John Doe", phone="111")

        result = await services.employees.update_employee_contact(
            emp["id"], EmployeeContactUpdate(contact_info=ContactInfo(phone="222", city="Pune"))
        )

        assert result.data["contact_info"]["phone"] == "222"
        assert result.data["contact_info"]["city"] == "Pune"
        assert result.data["phone"] == "111"

    @pytest.mark.asyncio
    async def test_update_round_trip(self, services, ticking_clock):
        emp = await make_employee(services, "EMP001", "John Doe")

        await services.employees.update_employee(emp["id"], EmployeeUpdate(designation="Architect"))
        fetched = await services.employees.get_employee(emp["id"])

        assert fetched.data["designation"] == "Architect"
        assert fetched.data["updated_at"] > emp["updated_at"]

    @pytest.mark.asyncio
    async def test_departments_designations_and_stats(self, services, ticking_clock):
        await make_employee(services, "E1", "Amy", department="Ops", designation="Lead")
        await make_employee(services, "E2", "Bob", department="HR", designation="Partner")
        gone = await make_employee(services, "E3", "Cy", department="Sales", designation="Rep")
        await services.employees.delete_employee(gone["id"])

        departments = await services.employees.get_departments()
        designations = await services.employees.get_designations()
        stats = (await services.employees.get_employee_stats()).data

        assert departments.data == ["HR", "Ops"]
        assert designations.data == ["Lead", "Partner"]
        assert (stats.total, stats.active, stats.resigned) == (2, 2, 1)
        assert sum(stats.by_department.values()) == stats.total
