import asyncio

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings

COLLECTIONS = [
    "users",
    "employees",
    "announcements",
    "announcement_categories",
    "notifications",
    "notification_categories",
    "incidents",
    "incident_categories",
    "documents",
]


async def check():
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    db = client[settings.MONGODB_DB_NAME]
    try:
        for name in COLLECTIONS:
            total = await db[name].count_documents({})
            active = await db[name].count_documents({"is_active": True})
            print(f"COUNT_STATUS: {name}={total} (active={active})")
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(check())
