import asyncio
import sys
from datetime import timedelta

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.core.security import Principal, token_for
from app.db.store import MongoStore
from app.services.container import build_services

ADMIN_UID = "admin"
ADMIN_EMAIL = "admin@company.com"


async def create_admin(uid: str = ADMIN_UID, email: str = ADMIN_EMAIL):
    if not settings.MONGODB_URL:
        print("❌ MONGODB_URL is not set")
        return 1

    print("🚀 Connecting to MongoDB...")
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    services = build_services(MongoStore(client[settings.MONGODB_DB_NAME]))

    try:
        principal = Principal(uid=uid, email=email, display_name="System Admin")
        profile = await services.auth.resolve_profile(principal)
        if not profile.success:
            print(f"❌ Could not load profile: {profile.error}")
            return 1

        if profile.data.get("role") == "admin":
            print(f"ℹ️ Admin user '{email}' already exists.")
        else:
            result = await services.store.update_document("users", uid, {"role": "admin", "status": "active"})
            if not result.success:
                print(f"❌ Could not promote {uid}: {result.error}")
                return 1
            print(f"✅ Admin user '{email}' ready")

        token = token_for(principal, expires_delta=timedelta(days=1))
        print(f"🔑 Bearer token (24h): {token}")
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(create_admin(*sys.argv[1:3])))
