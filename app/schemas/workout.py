"""Workout, WorkoutExercise and Set schemas.

Input models reject bad values with caller-facing messages
(``PydanticCustomError`` of type ``invalid_input``). Fields are declared in
the order they are checked, so the first error is the first violation.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from app.core.constants import (
    MAX_REPS,
    MAX_REST_SECONDS,
    MAX_WEIGHT_KG,
    MIN_REPS,
    MIN_REST_SECONDS,
    WORKOUT_NAME_MAX_LENGTH,
)
from app.schemas.exercise import ExerciseRead, check_exercise_name
from app.schemas.fields import invalid, trimmed_name, whole_number

WEIGHT_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


def _workout_name(value: Any) -> str | None:
    if value is None:
        return None
    return trimmed_name(
        value,
        WORKOUT_NAME_MAX_LENGTH,
        "Name is required",
        f"Name must be less than {WORKOUT_NAME_MAX_LENGTH} characters",
    )


def _coerce_datetime(value: Any, handler, message: str) -> Any:
    try:
        return handler(value)
    except ValidationError:
        raise invalid(message) from None


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


class WorkoutSetCreate(BaseModel):
    weight_kg: Decimal | None = None
    reps: int
    rest_time: int | None = None

    @field_validator("weight_kg", mode="before")
    @classmethod
    def _weight_shape(cls, v: Any) -> Decimal | None:
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise invalid("Weight must be a valid number")
        text = v if isinstance(v, str) else str(v)
        if not WEIGHT_PATTERN.match(text.strip()):
            raise invalid("Weight must be a valid number")
        weight = Decimal(text.strip())
        if weight > MAX_WEIGHT_KG:
            raise invalid(f"Weight must be at most {MAX_WEIGHT_KG} kg")
        return weight

    @field_validator("reps", mode="before")
    @classmethod
    def _reps_range(cls, v: Any) -> int:
        reps = whole_number(v, "Reps must be a whole number")
        if reps < MIN_REPS:
            raise invalid("At least 1 rep required")
        if reps > MAX_REPS:
            raise invalid(f"Maximum {MAX_REPS} reps")
        return reps

    @field_validator("rest_time", mode="before")
    @classmethod
    def _rest_range(cls, v: Any) -> int | None:
        if v is None:
            return None
        rest = whole_number(v, "Rest time must be whole seconds")
        if rest < MIN_REST_SECONDS:
            raise invalid("Rest time cannot be negative")
        if rest > MAX_REST_SECONDS:
            raise invalid("Rest time must be less than 1 hour")
        return rest


class WorkoutSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_exercise_id: UUID
    set_number: int
    weight_kg: Decimal | None = None
    reps: int
    rest_time: int | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Workout exercises
# ---------------------------------------------------------------------------


class WorkoutExerciseCreate(BaseModel):
    """Attach a catalog exercise by id, or by name (looked up or created in the catalog)."""

    exercise_id: UUID | None = None
    exercise_name: str | None = None

    @field_validator("exercise_name", mode="before")
    @classmethod
    def _exercise_name(cls, v: Any) -> str | None:
        if v is None:
            return None
        return check_exercise_name(v)

    @model_validator(mode="after")
    def _id_or_name(self) -> "WorkoutExerciseCreate":
        if self.exercise_id is None and self.exercise_name is None:
            raise invalid("Either exercise_id or exercise_name must be provided")
        return self


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    exercise_id: UUID
    order: int
    created_at: datetime
    exercise: ExerciseRead | None = None


class WorkoutExerciseTree(WorkoutExerciseRead):
    """Workout exercise with its sets, ascending by set_number."""

    sets: list[WorkoutSetRead] = []


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------


class WorkoutCreate(BaseModel):
    name: str | None = None
    started_at: datetime | None = None  # defaults to now

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str | None:
        return _workout_name(v)

    @field_validator("started_at", mode="wrap")
    @classmethod
    def _started_at(cls, v: Any, handler) -> datetime | None:
        return _coerce_datetime(v, handler, "Start time must be a valid date")


class WorkoutUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    name: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str | None:
        return _workout_name(v)

    @field_validator("started_at", mode="wrap")
    @classmethod
    def _started_at(cls, v: Any, handler) -> datetime | None:
        return _coerce_datetime(v, handler, "Start time must be a valid date")

    @field_validator("completed_at", mode="wrap")
    @classmethod
    def _completed_at(cls, v: Any, handler) -> datetime | None:
        return _coerce_datetime(v, handler, "Completion time must be a valid date")


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class WorkoutTree(WorkoutRead):
    """Workout with exercises ascending by order, each with its sets."""

    workout_exercises: list[WorkoutExerciseTree] = []
