"""FastAPI application entry point."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from qplan.config import settings
from qplan.database import Base, engine
from qplan.exceptions import QPlanError
from qplan.middleware.error_handler import qplan_exception_handler

# Import routers
from qplan.routers import assistant, events, resource_requests, resources

# Import all models so Base.metadata knows about them
from qplan.models.event import Event                        # noqa: F401
from qplan.models.resource import Resource                  # noqa: F401
from qplan.models.resource_request import ResourceRequest   # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="QPlan",
    description="Events, resource availability and resource requests with an AI assistant",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(QPlanError, qplan_exception_handler)

# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(resources.router, prefix="/api/resources", tags=["Resources"])
app.include_router(resource_requests.router, prefix="/api/resource-requests", tags=["ResourceRequests"])
app.include_router(assistant.router, prefix="/api/assistant", tags=["Assistant"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
