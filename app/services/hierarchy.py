"""Read side: workouts with their exercises (by order) and each exercise's sets (by set number)."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.db.session import storage_boundary
from app.models.workout import Workout, WorkoutExercise
from app.services.ownership import get_owned_workout, require_caller


def _tree_query():
    # populate_existing: a session that already holds these rows must see sets added since
    return (
        select(Workout)
        .options(
            selectinload(Workout.workout_exercises).options(
                selectinload(WorkoutExercise.exercise),
                selectinload(WorkoutExercise.sets),
            )
        )
        .execution_options(populate_existing=True)
    )


def _local_zone() -> tzinfo:
    name = get_settings().timezone
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """[start of day, end of day] in `tz`, both inclusive, as UTC datetimes."""
    tz = tz or _local_zone()
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


async def load_workout_tree(db: AsyncSession, workout_id: uuid.UUID, caller_id: str | None) -> Workout:
    """One workout with nested exercises and sets. Missing and foreign ids look the same."""
    caller = require_caller(caller_id)
    async with storage_boundary("load workout"):
        await get_owned_workout(db, workout_id, caller)
        result = await db.execute(_tree_query().where(Workout.id == workout_id))
        return result.scalar_one()


async def load_workouts(db: AsyncSession, caller_id: str | None) -> list[Workout]:
    """All of the caller's workouts, newest first."""
    caller = require_caller(caller_id)
    async with storage_boundary("load workouts"):
        result = await db.execute(
            _tree_query().where(Workout.user_id == caller).order_by(Workout.started_at.desc())
        )
        return list(result.scalars().all())


async def load_workouts_for_day(db: AsyncSession, day: date, caller_id: str | None) -> list[Workout]:
    """The caller's workouts that started on `day` (configured timezone), newest first."""
    caller = require_caller(caller_id)
    start, end = day_bounds(day)
    async with storage_boundary("load workouts"):
        result = await db.execute(
            _tree_query()
            .where(
                Workout.user_id == caller,
                Workout.started_at >= start,
                Workout.started_at <= end,
            )
            .order_by(Workout.started_at.desc())
        )
        return list(result.scalars().all())
