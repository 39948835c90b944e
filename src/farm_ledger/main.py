# src/farm_ledger/main.py
"""Main entry point for the Farm Ledger application."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from farm_ledger.api import auth_router, records_router, reports_router, system_router
from farm_ledger.api.dependencies import api_rate_limit
from farm_ledger.api.errors import register_error_handlers
from farm_ledger.core.logging_config import configure_logging
from farm_ledger.core.settings import settings
from farm_ledger.db.session import SessionLocal, create_tables
from farm_ledger.repositories.credential_store import CredentialStore
from farm_ledger.services.runtime import RuntimeState

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Farm management API: income, expenses, projects and reports",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_error_handlers(app)

# Every /api route shares the general rate limit.
for router in (system_router, auth_router, records_router, reports_router):
    app.include_router(router, prefix="/api", dependencies=[Depends(api_rate_limit)])


def initialize_database() -> None:
    """Create missing tables and seed the default accounts into an empty store."""
    create_tables()
    with SessionLocal() as db:
        CredentialStore(db).seed_default_users()


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    app.state.runtime = RuntimeState.from_settings(settings)
    if settings.uses_development_secret:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")
    if settings.init_db_on_startup:
        initialize_database()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Farm management API: income, expenses, projects and reports",
        "health": "/api/health",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("farm_ledger.main:app", host=settings.host, port=settings.port, reload=settings.debug)
