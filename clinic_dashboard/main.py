"""
main.py
========
This is the FastAPI entry point for the Back Pain Clinic Dashboard API.
It:
 - Configures logging and initializes the database.
 - Registers the error taxonomy handlers.
 - Mounts the auth, patients, assessments and appointments routers.
 - Exposes a public status endpoint.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .db import engine, init_db
from .errors import register_error_handlers
from .logging_config import configure_logging
from .models import Base
from .routers import appointments, assessments, auth, patients

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

app = FastAPI(title="Back Pain Clinic Dashboard API", version=VERSION)

# Allow the dashboard frontend to communicate
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(patients.router)
app.include_router(assessments.router)
app.include_router(appointments.router)


# ---------------------------------------------------------------------------
# APP STARTUP EVENT
# ---------------------------------------------------------------------------
@app.on_event("startup")
def startup_event():
    """
    Called when FastAPI starts.
    Creates any missing tables.
    """
    logger.info("🚀 Starting clinic dashboard API (%s)", settings.ENVIRONMENT)
    init_db(Base)
    logger.info("✅ Database ready")


# ---------------------------------------------------------------------------
# ROOT ENDPOINT
# ---------------------------------------------------------------------------

def _database_connected() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.exception("Database status check failed")
        return False


@app.get("/")
def root():
    """Basic health check endpoint. Reports no stored data."""
    return {
        "status": "ok",
        "message": "Back Pain Clinic Dashboard API is running",
        "serverTime": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "version": VERSION,
        "database": {"connected": _database_connected()},
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
