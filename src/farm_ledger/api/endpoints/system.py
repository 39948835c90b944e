"""Health and maintenance endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from farm_ledger.api.dependencies import SessionDep
from farm_ledger.repositories.credential_store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe with the current server time."""
    return {
        "status": "OK",
        "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


@router.post("/reset")
def reset_database(db: SessionDep) -> dict[str, str]:
    """Delete all records and users and reseed the default accounts.

    Unauthenticated; intended for demo deployments only.
    """
    try:
        CredentialStore(db).reset_all()
    except SQLAlchemyError as err:
        logger.error("Database reset failed: %s", err)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reset database",
        ) from err
    return {"message": "Database reset successfully"}
