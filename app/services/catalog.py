"""Shared exercise catalog: listing, search and case-insensitive get-or-create."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from app.core.errors import NotFoundOrUnauthorized
from app.db.session import storage_boundary
from app.models.exercise import Exercise
from app.schemas.exercise import ExerciseCreate
from app.services.ownership import require_caller
from app.services.validators import parse_input

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def find_exercise_by_name(db: AsyncSession, name: str) -> Exercise | None:
    """Exact match ignoring case (same expression as the unique index)."""
    result = await db.execute(
        select(Exercise).where(func.lower(Exercise.name) == func.lower(name.strip()))
    )
    return result.scalars().first()


async def get_or_create_exercise(db: AsyncSession, name: str) -> Exercise:
    """
    Return the catalog entry named `name` (ignoring case), creating it if missing.
    The insert runs in a SAVEPOINT: if a concurrent request created the same name
    first, the unique index rejects ours and the existing row is returned instead.
    """
    name = name.strip()
    existing = await find_exercise_by_name(db, name)
    if existing is not None:
        return existing

    exercise = Exercise(name=name)
    try:
        async with db.begin_nested():
            db.add(exercise)
            await db.flush()
    except IntegrityError:
        logger.info("Exercise %r was created concurrently, re-reading", name)
        existing = await find_exercise_by_name(db, name)
        if existing is None:
            raise
        return existing
    logger.info("Created catalog exercise %s (%r)", exercise.id, name)
    return exercise


async def get_exercise_by_id(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        logger.info("Exercise %s not found in catalog", exercise_id)
        raise NotFoundOrUnauthorized("Exercise")
    return exercise


# ---------------------------------------------------------------------------
# Entry points (each resolves the caller first)
# ---------------------------------------------------------------------------


async def list_exercises(db: AsyncSession, caller_id: str | None) -> list[Exercise]:
    """Whole catalog, by name."""
    require_caller(caller_id)
    async with storage_boundary("load exercises"):
        result = await db.execute(select(Exercise).order_by(Exercise.name))
        return list(result.scalars().all())


async def search_exercises(
    db: AsyncSession,
    caller_id: str | None,
    term: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[Exercise]:
    """Case-insensitive substring match on the name; % and _ are matched literally."""
    require_caller(caller_id)
    limit = max(1, min(limit, MAX_SEARCH_LIMIT))
    pattern = f"%{_escape_like(term.strip())}%"
    async with storage_boundary("search exercises"):
        result = await db.execute(
            select(Exercise)
            .where(Exercise.name.ilike(pattern, escape="\\"))
            .order_by(Exercise.name)
            .limit(limit)
        )
        return list(result.scalars().all())


async def get_exercise(db: AsyncSession, caller_id: str | None, exercise_id: uuid.UUID) -> Exercise:
    require_caller(caller_id)
    async with storage_boundary("load exercise"):
        return await get_exercise_by_id(db, exercise_id)


async def create_exercise(
    db: AsyncSession,
    caller_id: str | None,
    data: ExerciseCreate | Mapping[str, Any],
) -> Exercise:
    """Idempotent create: an existing name (ignoring case) is returned as-is."""
    require_caller(caller_id)
    payload = parse_input(ExerciseCreate, data)
    async with storage_boundary("create exercise"):
        return await get_or_create_exercise(db, payload.name)
