"""Mutation entry points for workouts, workout exercises and sets.

Each entry point resolves the caller, validates input, checks ownership and
only then writes. Position counters are assigned under a lock on the parent row.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import storage_boundary
from app.models.workout import Workout, WorkoutExercise, WorkoutSet
from app.schemas.workout import (
    WorkoutCreate,
    WorkoutExerciseCreate,
    WorkoutSetCreate,
    WorkoutUpdate,
)
from app.services import catalog
from app.services.ordering import next_exercise_order, next_set_number
from app.services.ownership import (
    get_owned_set,
    get_owned_workout,
    get_owned_workout_exercise,
    require_caller,
)
from app.services.validators import (
    as_utc,
    ensure_completed_after_start,
    ensure_no_dependent_sets,
    parse_input,
)

logger = logging.getLogger(__name__)


async def create_workout(
    db: AsyncSession,
    caller_id: str | None,
    data: WorkoutCreate | Mapping[str, Any],
) -> Workout:
    """Start a workout owned by the caller. started_at defaults to now."""
    caller = require_caller(caller_id)
    payload = parse_input(WorkoutCreate, data)
    started_at = as_utc(payload.started_at) if payload.started_at else datetime.now(timezone.utc)
    async with storage_boundary("create workout"):
        workout = Workout(user_id=caller, name=payload.name, started_at=started_at)
        db.add(workout)
        await db.flush()
        await db.refresh(workout)
    logger.info("Created workout %s for %s", workout.id, caller)
    return workout


async def update_workout(
    db: AsyncSession,
    caller_id: str | None,
    workout_id: uuid.UUID,
    data: WorkoutUpdate | Mapping[str, Any],
) -> Workout:
    """Apply the fields present in `data`. user_id is never changed."""
    caller = require_caller(caller_id)
    payload = parse_input(WorkoutUpdate, data)
    changes = payload.model_dump(exclude_unset=True)
    # started_at is NOT NULL: an explicit null means "leave as is"
    if changes.get("started_at") is None:
        changes.pop("started_at", None)
    for key in ("started_at", "completed_at"):
        if changes.get(key) is not None:
            changes[key] = as_utc(changes[key])

    async with storage_boundary("update workout"):
        workout = await get_owned_workout(db, workout_id, caller)
        ensure_completed_after_start(
            changes.get("started_at", workout.started_at),
            changes.get("completed_at", workout.completed_at),
        )
        for k, v in changes.items():
            setattr(workout, k, v)
        await db.flush()
        await db.refresh(workout)
    return workout


async def add_exercise_to_workout(
    db: AsyncSession,
    caller_id: str | None,
    workout_id: uuid.UUID,
    data: WorkoutExerciseCreate | Mapping[str, Any],
) -> WorkoutExercise:
    """Append an exercise (by id, or by name via the catalog) at the next order position."""
    caller = require_caller(caller_id)
    payload = parse_input(WorkoutExerciseCreate, data)
    async with storage_boundary("add exercise"):
        workout = await get_owned_workout(db, workout_id, caller, lock=True)
        if payload.exercise_id is not None:
            exercise = await catalog.get_exercise_by_id(db, payload.exercise_id)
        else:
            exercise = await catalog.get_or_create_exercise(db, payload.exercise_name)
        order = await next_exercise_order(db, workout.id)
        workout_exercise = WorkoutExercise(workout_id=workout.id, exercise=exercise, order=order)
        db.add(workout_exercise)
        await db.flush()
    logger.info("Added exercise %s to workout %s at order %d", exercise.id, workout.id, order)
    return workout_exercise


async def delete_workout_exercise(
    db: AsyncSession,
    caller_id: str | None,
    workout_exercise_id: uuid.UUID,
) -> None:
    """Remove an exercise from its workout; refused while it still has sets."""
    caller = require_caller(caller_id)
    async with storage_boundary("delete exercise"):
        workout_exercise = await get_owned_workout_exercise(db, workout_exercise_id, caller)
        await ensure_no_dependent_sets(db, workout_exercise.id)
        await db.delete(workout_exercise)
        await db.flush()
    logger.info("Deleted workout exercise %s", workout_exercise_id)


async def add_set(
    db: AsyncSession,
    caller_id: str | None,
    workout_exercise_id: uuid.UUID,
    data: WorkoutSetCreate | Mapping[str, Any],
) -> WorkoutSet:
    """Log a set with the next set number (1 for the first)."""
    caller = require_caller(caller_id)
    payload = parse_input(WorkoutSetCreate, data)
    async with storage_boundary("add set"):
        workout_exercise = await get_owned_workout_exercise(db, workout_exercise_id, caller, lock=True)
        set_number = await next_set_number(db, workout_exercise.id)
        set_ = WorkoutSet(
            workout_exercise_id=workout_exercise.id,
            set_number=set_number,
            weight_kg=payload.weight_kg,
            reps=payload.reps,
            rest_time=payload.rest_time,
        )
        db.add(set_)
        await db.flush()
        await db.refresh(set_)
    logger.info("Logged set %d on workout exercise %s", set_number, workout_exercise.id)
    return set_


async def delete_set(db: AsyncSession, caller_id: str | None, set_id: uuid.UUID) -> None:
    """Delete one set. Remaining set numbers are left as they are."""
    caller = require_caller(caller_id)
    async with storage_boundary("delete set"):
        set_ = await get_owned_set(db, set_id, caller)
        await db.delete(set_)
        await db.flush()
    logger.info("Deleted set %s", set_id)
