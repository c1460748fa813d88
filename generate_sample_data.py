import asyncio
import random

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.db.store import MongoStore
from app.models.announcement import AnnouncementCreate
from app.models.query import CategoryCreate
from app.models.document import DocumentCreate, FileUpload
from app.models.employee import EmployeeCreate
from app.models.incident import IncidentCreate
from app.models.notification import NotificationCreate
from app.models.user import UserCreate
from app.services.container import Services, build_services

CATEGORIES = [
    ("general", "General company news", "#2196f3"),
    ("hr", "Human resources", "#9c27b0"),
    ("it", "IT and systems", "#ff9800"),
    ("safety", "Health and safety", "#f44336"),
]

DEPARTMENTS = {
    "Engineering": ["Senior Developer", "Frontend Lead", "DevOps Engineer"],
    "HR": ["HR Manager", "Talent Acquisition"],
    "Finance": ["Financial Analyst", "Accountant"],
    "Marketing": ["Marketing Lead", "Content Writer"],
}

NAMES = [
    ("Alice", "Smith"), ("Bob", "Johnson"), ("Charlie", "Davis"),
    ("Diana", "Prince"), ("Ethan", "Hunt"), ("Fiona", "Gallagher"),
]


async def seed_categories(services: Services):
    for service in (services.announcements, services.notifications, services.incidents):
        existing = await service.get_categories()
        if existing.success and existing.data:
            print(f"⏩ {service.categories_collection} already seeded, skipping...")
            continue
        for name, description, color in CATEGORIES:
            await service.create_category(CategoryCreate(name=name, description=description, color=color))
        print(f"✅ Seeded {service.categories_collection}")


async def seed_people(services: Services):
    for i, (first, last) in enumerate(NAMES):
        dept = random.choice(list(DEPARTMENTS))
        email = f"{first.lower()}.{last.lower()}@company.com"
        result = await services.employees.create_employee(EmployeeCreate(
            employee_id=f"EMP{100 + i}",
            employee_name=f"{first} {last}",
            email=email,
            department=dept,
            designation=random.choice(DEPARTMENTS[dept]),
        ))
        print(f"{'✅' if result.success else '⏩'} Employee {first} {last}: {result.error or 'created'}")

        await services.users.create_user(UserCreate(
            first_name=first,
            last_name=last,
            email=email,
            role="hr" if dept == "HR" else "employee",
            department=dept,
        ))


async def seed_content(services: Services):
    existing = await services.announcements.get_announcements()
    if existing.success and existing.data:
        print("⏩ Content already present, skipping...")
        return

    await services.announcements.create_announcement(AnnouncementCreate(
        title="Welcome to the HR portal",
        content="All company announcements will be posted here.",
        type="info",
        priority="medium",
        is_published=True,
        is_pinned=True,
    ))
    await services.announcements.create_announcement(AnnouncementCreate(
        title="Payroll update",
        content="Salaries will be credited on the last working day of the month.",
        type="update",
        priority="high",
        category="hr",
        is_published=True,
    ))
    await services.notifications.create_notification(NotificationCreate(
        title="Complete your profile",
        message="Please add an emergency contact to your profile.",
        type="user",
        category="hr",
    ))
    await services.incidents.create_incident(IncidentCreate(
        title="Server outage",
        description="The intranet was unreachable for 20 minutes.",
        category="it",
        severity="high",
        priority="urgent",
        location="Data center",
    ))
    await services.documents.create_document(
        DocumentCreate(title="Employee handbook", type="policy", category="hr"),
        FileUpload(file_name="handbook.txt", file_type="text/plain", content=b"Be kind. Ship often."),
    )
    print("✅ Sample announcements, notifications, incidents and documents created")


async def create_sample_data():
    """Populate the database with sample HR portal records"""
    print("🚀 Starting Sample Data Generation...")
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    services = build_services(MongoStore(client[settings.MONGODB_DB_NAME]))
    try:
        await seed_categories(services)
        await seed_people(services)
        await seed_content(services)
    finally:
        client.close()
    print("🎉 Sample data ready")


if __name__ == "__main__":
    asyncio.run(create_sample_data())
