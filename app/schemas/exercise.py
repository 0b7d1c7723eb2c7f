"""Exercise catalog schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.constants import EXERCISE_NAME_MAX_LENGTH
from app.schemas.fields import trimmed_name


def check_exercise_name(value: Any) -> str:
    return trimmed_name(
        value,
        EXERCISE_NAME_MAX_LENGTH,
        "Exercise name is required",
        f"Exercise name must be at most {EXERCISE_NAME_MAX_LENGTH} characters",
    )


class ExerciseCreate(BaseModel):
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return check_exercise_name(v)


class ExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
