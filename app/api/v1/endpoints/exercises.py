"""Exercise catalog endpoints (shared across users, authenticated callers only)."""

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_id
from app.core.constants import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from app.db.session import get_db
from app.schemas.exercise import ExerciseRead
from app.schemas.result import ActionResult
from app.services import catalog

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Whole catalog ordered by name."""
    return await catalog.list_exercises(db, caller_id)


@router.get("/search", response_model=list[ExerciseRead])
async def search_exercises(
    q: str = Query("", max_length=200),
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_SEARCH_LIMIT),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Case-insensitive name search."""
    return await catalog.search_exercises(db, caller_id, q, limit)


@router.post("", response_model=ActionResult[ExerciseRead], status_code=201)
async def create_exercise(
    payload: dict[str, Any] | None = Body(None),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Get-or-create by name; an existing entry (ignoring case) is returned instead of a duplicate."""
    exercise = await catalog.create_exercise(db, caller_id, payload or {})
    return ActionResult[ExerciseRead].ok(ExerciseRead.model_validate(exercise))


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Get a single catalog exercise."""
    return await catalog.get_exercise(db, caller_id, exercise_id)
