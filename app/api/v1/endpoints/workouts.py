"""Workout endpoints: list, day view, detail tree, create, update, add exercise.

Request bodies arrive as plain JSON and are validated by the service layer,
after the caller is resolved, so an anonymous request is always a 401.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_id
from app.db.session import get_db
from app.schemas.result import ActionResult
from app.schemas.workout import (
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutTree,
)
from app.services import hierarchy, workouts as workout_service

router = APIRouter()


@router.get("", response_model=list[WorkoutTree])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
    on_date: date | None = Query(None, alias="date", description="Only workouts started on this day"),
):
    """The caller's workouts (newest first) with nested exercises and sets."""
    if on_date is not None:
        return await hierarchy.load_workouts_for_day(db, on_date, caller_id)
    return await hierarchy.load_workouts(db, caller_id)


@router.post("", response_model=ActionResult[WorkoutRead], status_code=201)
async def create_workout(
    payload: dict[str, Any] | None = Body(None),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Start a new workout."""
    workout = await workout_service.create_workout(db, caller_id, payload or {})
    return ActionResult[WorkoutRead].ok(WorkoutRead.model_validate(workout))


@router.get("/{workout_id}", response_model=WorkoutTree)
async def get_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Workout with exercises by order and each exercise's sets by set number."""
    return await hierarchy.load_workout_tree(db, workout_id, caller_id)


@router.patch("/{workout_id}", response_model=ActionResult[WorkoutRead])
async def update_workout(
    workout_id: uuid.UUID,
    payload: dict[str, Any] | None = Body(None),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Update name, start time or completion time (partial)."""
    workout = await workout_service.update_workout(db, caller_id, workout_id, payload or {})
    return ActionResult[WorkoutRead].ok(WorkoutRead.model_validate(workout))


@router.post("/{workout_id}/exercises", response_model=ActionResult[WorkoutExerciseRead], status_code=201)
async def add_exercise_to_workout(
    workout_id: uuid.UUID,
    payload: dict[str, Any] | None = Body(None),
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Append an exercise by catalog id or by name (created in the catalog if new)."""
    workout_exercise = await workout_service.add_exercise_to_workout(db, caller_id, workout_id, payload or {})
    return ActionResult[WorkoutExerciseRead].ok(WorkoutExerciseRead.model_validate(workout_exercise))
