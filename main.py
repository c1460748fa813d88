"""
Main FastAPI Application
Entry point for the backend server
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import Settings, get_settings
from app.core import clock
from app.core.logging_config import setup_logging
from app.db.memory import MemoryStore
from app.db.store import DocumentStore, MongoStore
from app.services.container import build_services

# Import routers
from app.api.routes import announcements, auth, documents, employees, incidents, notifications, users

logger = logging.getLogger(__name__)


def connect_store(settings: Settings):
    """Returns (store, client); client is None unless Mongo is used."""
    if settings.use_memory_store:
        logger.info("Using in-memory document store")
        return MemoryStore(), None
    if not settings.MONGODB_URL:
        logger.warning("MONGODB_URL is not set; the document store is not available")
        return MongoStore(None), None

    client = AsyncIOMotorClient(settings.MONGODB_URL)
    logger.info("Connected to MongoDB: %s", settings.MONGODB_DB_NAME)
    return MongoStore(client[settings.MONGODB_DB_NAME]), client


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)
        client = None
        if store is None:
            active_store, client = connect_store(settings)
            app.state.services = build_services(active_store)

        logger.info("Server running on %s:%s", settings.HOST, settings.PORT)
        yield

        logger.info("Shutting down")
        if client is not None:
            client.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="HR portal: employees, announcements, notifications, incidents and documents",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings
    if store is not None:
        app.state.services = build_services(store)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
    app.include_router(announcements.router, prefix="/api/announcements", tags=["Announcements"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
    app.include_router(incidents.router, prefix="/api/incidents", tags=["Incidents"])
    app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"{settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "docs": "/api/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        services = getattr(app.state, "services", None)
        available = services is not None and services.store.available
        return {
            "status": "healthy" if available else "degraded",
            "database": "available" if available else "not available",
            "timestamp": clock.utcnow().isoformat() + "Z",
        }

    return app


# Create FastAPI app
app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
