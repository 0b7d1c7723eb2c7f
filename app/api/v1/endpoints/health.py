"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.exercise import Exercise

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Liveness. Includes built_at when BACKEND_BUILT_AT is set."""
    payload: dict = {"status": "ok", "environment": get_settings().environment}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: database reachable and the schema migrated (catalog table queryable)."""
    try:
        await db.execute(text("SELECT 1"))
        await db.execute(select(Exercise.id).limit(1))
    except SQLAlchemyError:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unavailable"},
        )
    return {"status": "ok", "database": "connected"}
