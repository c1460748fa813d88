"""
Service container
Built once per application around a single document store
"""
from dataclasses import dataclass

from app.db.store import DocumentStore
from app.services.announcements import AnnouncementService
from app.services.auth import AuthService
from app.services.documents import DocumentService
from app.services.employees import EmployeeService
from app.services.incidents import IncidentService
from app.services.notifications import NotificationService
from app.services.users import UserService


@dataclass
class Services:
    store: DocumentStore
    announcements: AnnouncementService
    notifications: NotificationService
    incidents: IncidentService
    documents: DocumentService
    users: UserService
    employees: EmployeeService
    auth: AuthService


def build_services(store: DocumentStore) -> Services:
    return Services(
        store=store,
        announcements=AnnouncementService(store),
        notifications=NotificationService(store),
        incidents=IncidentService(store),
        documents=DocumentService(store),
        users=UserService(store),
        employees=EmployeeService(store),
        auth=AuthService(store),
    )
