"""Ownership guard: every read and write is checked against the caller identity.

A record that does not exist and a record owned by someone else raise the
same NotFoundOrUnauthorized, so ids cannot be probed. The log line says which
of the two happened.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundOrUnauthorized, Unauthenticated
from app.models.workout import Workout, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)


def require_caller(caller_id: str | None) -> str:
    """Fail before touching storage when no identity was resolved."""
    if not caller_id:
        raise Unauthenticated()
    return caller_id


def _check_owner(resource: str, record_id: uuid.UUID, owner_id: str | None, caller_id: str) -> None:
    if owner_id is None:
        logger.info("%s %s not found (caller=%s)", resource, record_id, caller_id)
        raise NotFoundOrUnauthorized(resource)
    if owner_id != caller_id:
        logger.info("%s %s denied: owned by another user (caller=%s)", resource, record_id, caller_id)
        raise NotFoundOrUnauthorized(resource)


async def get_owned_workout(
    db: AsyncSession,
    workout_id: uuid.UUID,
    caller_id: str,
    *,
    lock: bool = False,
) -> Workout:
    """Fetch a workout and verify the caller owns it. lock=True takes a row lock (FOR UPDATE)."""
    stmt = select(Workout).where(Workout.id == workout_id)
    if lock:
        stmt = stmt.with_for_update()
    workout = (await db.execute(stmt)).scalar_one_or_none()
    _check_owner("Workout", workout_id, workout.user_id if workout else None, caller_id)
    return workout


async def get_owned_workout_exercise(
    db: AsyncSession,
    workout_exercise_id: uuid.UUID,
    caller_id: str,
    *,
    lock: bool = False,
) -> WorkoutExercise:
    """WorkoutExercise -> Workout.user_id in one joined query."""
    stmt = (
        select(WorkoutExercise, Workout.user_id)
        .join(Workout, WorkoutExercise.workout_id == Workout.id)
        .where(WorkoutExercise.id == workout_exercise_id)
    )
    if lock:
        stmt = stmt.with_for_update(of=WorkoutExercise)
    row = (await db.execute(stmt)).one_or_none()
    _check_owner("Exercise", workout_exercise_id, row.user_id if row else None, caller_id)
    return row.WorkoutExercise


async def get_owned_set(db: AsyncSession, set_id: uuid.UUID, caller_id: str) -> WorkoutSet:
    """WorkoutSet -> WorkoutExercise -> Workout.user_id in one joined query."""
    stmt = (
        select(WorkoutSet, Workout.user_id)
        .join(WorkoutExercise, WorkoutSet.workout_exercise_id == WorkoutExercise.id)
        .join(Workout, WorkoutExercise.workout_id == Workout.id)
        .where(WorkoutSet.id == set_id)
    )
    row = (await db.execute(stmt)).one_or_none()
    _check_owner("Set", set_id, row.user_id if row else None, caller_id)
    return row.WorkoutSet
