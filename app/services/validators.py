"""Mutation pre-conditions. Checks fail fast, before anything is written."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import HasDependentSets, InvalidInput
from app.models.workout import WorkoutSet
from app.schemas.fields import INVALID_INPUT

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Request locations FastAPI puts in front of the field name
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def first_error_message(errors: Sequence[Mapping[str, Any]]) -> str:
    """Message of the first violation only. Our own checks carry a ready-made message;
    built-in pydantic errors get the field name in front."""
    if not errors:
        return "Invalid input"
    error = errors[0]
    message = str(error.get("msg") or "Invalid input")
    if error.get("type") == INVALID_INPUT:
        return message
    loc = [str(part) for part in error.get("loc", ()) if part not in _REQUEST_LOCATIONS]
    return f"{'.'.join(loc)}: {message}" if loc else message


def parse_input(model: type[M], data: M | Mapping[str, Any]) -> M:
    """Validate raw input into model, raising InvalidInput with the first violation."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput(first_error_message(exc.errors())) from None


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_completed_after_start(started_at: datetime, completed_at: datetime | None) -> None:
    if completed_at is not None and as_utc(completed_at) < as_utc(started_at):
        raise InvalidInput("Completion time cannot be before start time")


async def ensure_no_dependent_sets(db: AsyncSession, workout_exercise_id: uuid.UUID) -> None:
    """A workout exercise can only be removed once all of its sets are gone."""
    count = await db.scalar(
        select(func.count()).select_from(WorkoutSet).where(WorkoutSet.workout_exercise_id == workout_exercise_id)
    )
    if count:
        logger.info("Workout exercise %s still has %d set(s)", workout_exercise_id, count)
        raise HasDependentSets()
