"""
Per-page list configurations
Wires each entity's service into a ListViewState
"""
from typing import Any, Callable, Dict, Type, get_args

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from app.core.filtering import (
    DateRangeFilter,
    EqualsFilter,
    FlagFilter,
    SearchFilter,
    StatusFilter,
)
from app.core.results import ApiResponse, fail
from app.models.announcement import AnnouncementCreate, AnnouncementUpdate
from app.models.document import DocumentCreate, DocumentUpdate
from app.models.employee import EmployeeCreate, EmployeeUpdate
from app.models.incident import IncidentCreate, IncidentUpdate
from app.models.notification import NotificationCreate, NotificationUpdate
from app.models.user import UserCreate, UserUpdate
from app.services.container import Services
from app.views.list_state import ListPageConfig, ListSource, ListViewState


def _holds_text(field: FieldInfo) -> bool:
    annotation = field.annotation
    return annotation is str or str in get_args(annotation)


def parse_form(model: Type[BaseModel], form: Dict[str, Any], keep_blank_text: bool = False):
    """
    Validate a form dict; blank optional inputs count as unset.
    With keep_blank_text, a cleared text field is kept as "" so an edit can blank it.
    """
    fields = model.model_fields
    values = {
        k: v for k, v in form.items()
        if v is not None and (v != "" or (keep_blank_text and k in fields and _holds_text(fields[k])))
    }
    try:
        return model.model_validate(values), None
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return None, fail(f"{location}: {first['msg']}")


def form_call(model: Type[BaseModel], call: Callable[..., Any]):
    async def create(form: Dict[str, Any]) -> ApiResponse:
        parsed, error = parse_form(model, form)
        return error if error else await call(parsed)
    return create


def form_update(model: Type[BaseModel], call: Callable[..., Any]):
    async def update(doc_id: str, form: Dict[str, Any]) -> ApiResponse:
        parsed, error = parse_form(model, form, keep_blank_text=True)
        return error if error else await call(doc_id, parsed)
    return update


ANNOUNCEMENTS = ListPageConfig(
    data_type="announcements",
    entity_label="Announcement",
    filters=(
        SearchFilter("search", ("title", "content")),
        EqualsFilter("type", "type"),
        EqualsFilter("priority", "priority"),
        StatusFilter("status", (
            ("published", "is_published", True),
            ("draft", "is_published", False),
            ("pinned", "is_pinned", True),
            ("archived", "is_archived", True),
        )),
        DateRangeFilter("date_range", "publish_date"),
    ),
    required_fields=("title", "content"),
    blank_form={
        "title": "", "content": "", "summary": "", "type": "general",
        "priority": "medium", "category": "general", "is_published": False, "is_pinned": False,
    },
)

NOTIFICATIONS = ListPageConfig(
    data_type="notifications",
    entity_label="Notification",
    filters=(
        SearchFilter("search", ("title", "message")),
        EqualsFilter("type", "type"),
        EqualsFilter("priority", "priority"),
        StatusFilter("read_status", (("read", "is_read", True), ("unread", "is_read", False))),
        FlagFilter("pinned", "is_pinned"),
    ),
    required_fields=("title", "message"),
    blank_form={
        "title": "", "message": "", "type": "info", "priority": "medium",
        "category": "general", "recipient_id": "all",
    },
)

INCIDENTS = ListPageConfig(
    data_type="incidents",
    entity_label="Incident",
    filters=(
        SearchFilter("search", ("title", "description", "location")),
        EqualsFilter("severity", "severity"),
        EqualsFilter("status", "status"),
        EqualsFilter("priority", "priority"),
        EqualsFilter("category", "category"),
        DateRangeFilter("date_range", "reported_at"),
    ),
    required_fields=("title", "description"),
    blank_form={
        "title": "", "description": "", "category": "general", "severity": "low",
        "status": "open", "priority": "medium", "location": "",
    },
)

DOCUMENTS = ListPageConfig(
    data_type="documents",
    entity_label="Document",
    filters=(
        SearchFilter("search", ("title", "description", "category")),
        EqualsFilter("type", "type"),
        EqualsFilter("category", "category"),
        EqualsFilter("access_level", "access_level"),
    ),
    required_fields=("title",),
    blank_form={
        "title": "", "description": "", "type": "other", "category": "general",
        "access_level": "public",
    },
)

USERS = ListPageConfig(
    data_type="users",
    entity_label="User",
    filters=(
        SearchFilter("search", ("first_name", "last_name", "email")),
        EqualsFilter("role", "role"),
        EqualsFilter("department", "department"),
        EqualsFilter("status", "status"),
    ),
    required_fields=("first_name", "email"),
    blank_form={
        "first_name": "", "last_name": "", "email": "", "role": "employee",
        "department": "", "position": "", "phone": "",
    },
)

EMPLOYEES = ListPageConfig(
    data_type="employees",
    entity_label="Employee",
    filters=(
        SearchFilter("search", ("employee_name", "employee_id", "email")),
        EqualsFilter("department", "department"),
        EqualsFilter("designation", "designation"),
        FlagFilter("resigned", "resigned"),
    ),
    required_fields=("employee_id", "employee_name"),
    blank_form={
        "employee_id": "", "employee_name": "", "email": "", "phone": "",
        "department": "", "designation": "",
    },
)


def announcements_page(services: Services) -> ListViewState:
    svc = services.announcements
    return ListViewState(ANNOUNCEMENTS, ListSource(
        fetch=svc.get_announcements,
        create=form_call(AnnouncementCreate, svc.create_announcement),
        update=form_update(AnnouncementUpdate, svc.update_announcement),
        permanent_delete=svc.permanent_delete_announcement,
        fetch_stats=svc.get_announcement_stats,
        on_view=svc.increment_read_count,
    ))


def notifications_page(services: Services) -> ListViewState:
    svc = services.notifications
    return ListViewState(NOTIFICATIONS, ListSource(
        fetch=svc.get_notifications,
        create=form_call(NotificationCreate, svc.create_notification),
        update=form_update(NotificationUpdate, svc.update_notification),
        permanent_delete=svc.permanent_delete_notification,
        fetch_stats=svc.get_notification_stats,
    ))


def incidents_page(services: Services) -> ListViewState:
    svc = services.incidents
    return ListViewState(INCIDENTS, ListSource(
        fetch=svc.get_incidents,
        create=form_call(IncidentCreate, svc.create_incident),
        update=form_update(IncidentUpdate, svc.update_incident),
        permanent_delete=svc.permanent_delete_incident,
        fetch_stats=svc.get_incident_stats,
    ))


def documents_page(services: Services) -> ListViewState:
    svc = services.documents
    return ListViewState(DOCUMENTS, ListSource(
        fetch=svc.get_documents,
        create=form_call(DocumentCreate, svc.create_document),
        update=form_update(DocumentUpdate, svc.update_document),
        permanent_delete=svc.permanent_delete_document,
        fetch_stats=svc.get_document_stats,
    ))


def users_page(services: Services) -> ListViewState:
    svc = services.users
    return ListViewState(USERS, ListSource(
        fetch=svc.get_users,
        create=form_call(UserCreate, svc.create_user),
        update=form_update(UserUpdate, svc.update_user),
        permanent_delete=svc.permanent_delete_user,
        fetch_stats=svc.get_user_stats,
    ))


def employees_page(services: Services) -> ListViewState:
    svc = services.employees
    return ListViewState(EMPLOYEES, ListSource(
        fetch=svc.get_employees,
        create=form_call(EmployeeCreate, svc.create_employee),
        update=form_update(EmployeeUpdate, svc.update_employee),
        permanent_delete=svc.permanent_delete_employee,
        fetch_stats=svc.get_employee_stats,
    ))


PAGES = {
    "announcements": announcements_page,
    "notifications": notifications_page,
    "incidents": incidents_page,
    "documents": documents_page,
    "users": users_page,
    "employees": employees_page,
}
