"""Position counters: exercise order inside a workout, set number inside a workout exercise.

Both are "current max + 1". Callers must hold a lock on the parent row
(see ownership.get_owned_* with lock=True) for the read and the insert to
be one unit; the unique constraints on (parent, position) are the backstop.
"""

from collections.abc import Iterable
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import EXERCISE_ORDER_START, SET_NUMBER_START
from app.models.workout import WorkoutExercise, WorkoutSet


def next_position(existing: Iterable[int | None], start: int) -> int:
    """max(existing) + 1, or start when there is nothing yet."""
    values = [v for v in existing if v is not None]
    if not values:
        return start
    return max(values) + 1


async def next_exercise_order(db: AsyncSession, workout_id: uuid.UUID) -> int:
    current = await db.scalar(
        select(func.max(WorkoutExercise.order)).where(WorkoutExercise.workout_id == workout_id)
    )
    return next_position([current], EXERCISE_ORDER_START)


async def next_set_number(db: AsyncSession, workout_exercise_id: uuid.UUID) -> int:
    current = await db.scalar(
        select(func.max(WorkoutSet.set_number)).where(WorkoutSet.workout_exercise_id == workout_exercise_id)
    )
    return next_position([current], SET_NUMBER_START)
