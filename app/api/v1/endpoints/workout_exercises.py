"""Workout exercise endpoints: remove from workout, log a set."""

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_id
from app.db.session import get_db
from app.schemas.result import ActionResult
from app.schemas.workout import WorkoutSetRead
from app.services import workouts as workout_service

router = APIRouter()


@router.delete("/{workout_exercise_id}", response_model=ActionResult[None])
async def delete_workout_exercise(
    workout_exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Remove an exercise from its workout (409 while it still has sets)."""
    await workout_service.delete_workout_exercise(db, caller_id, workout_exercise_id)
    return ActionResult[None].ok()


@router.post("/{workout_exercise_id}/sets", response_model=ActionResult[WorkoutSetRead], status_code=201)
async def add_set(
    workout_exercise_id: uuid.UUID,
    payload: dict[str, Any] | None = Body(None),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Log a set; set_number is assigned by the server."""
    set_ = await workout_service.add_set(db, caller_id, workout_exercise_id, payload or {})
    return ActionResult[WorkoutSetRead].ok(WorkoutSetRead.model_validate(set_))
