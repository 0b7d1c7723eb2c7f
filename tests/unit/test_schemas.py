"""Input schemas and first-violation reporting."""

from datetime import datetime
from decimal import Decimal
import uuid

import pytest
from pydantic import ValidationError

from app.core.errors import InvalidInput
from app.schemas.exercise import ExerciseCreate
from app.schemas.workout import (
    WorkoutCreate,
    WorkoutExerciseCreate,
    WorkoutSetCreate,
    WorkoutUpdate,
)
from app.services.validators import first_error_message, parse_input

pytestmark = pytest.mark.unit


def _message(model, data) -> str:
    with pytest.raises(InvalidInput) as exc_info:
        parse_input(model, data)
    return exc_info.value.message


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "data, message",
    [
        ({"reps": 0}, "At least 1 rep required"),
        ({"reps": 1001}, "Maximum 1000 reps"),
        ({"reps": 5, "rest_time": -1}, "Rest time cannot be negative"),
        ({"reps": 5, "rest_time": 3601}, "Rest time must be less than 1 hour"),
        ({"reps": 5.5}, "Reps must be a whole number"),
        ({"reps": "10"}, "Reps must be a whole number"),
        ({"reps": True}, "Reps must be a whole number"),
        ({"reps": 5, "rest_time": 1.5}, "Rest time must be whole seconds"),
        ({"reps": 5, "weight_kg": "abc"}, "Weight must be a valid number"),
        ({"reps": 5, "weight_kg": "-5"}, "Weight must be a valid number"),
        ({"reps": 5, "weight_kg": "80.125"}, "Weight must be a valid number"),
        ({"reps": 5, "weight_kg": "1234567"}, "Weight must be at most 9999.99 kg"),
        ({"reps": 5, "weight_kg": 10000}, "Weight must be at most 9999.99 kg"),
    ],
)
def test_set_rejects_out_of_range_values(data, message):
    assert _message(WorkoutSetCreate, data) == message


@pytest.mark.parametrize(
    "data",
    [
        {"reps": 1},
        {"reps": 1000},
        {"reps": 5, "rest_time": 0},
        {"reps": 5, "rest_time": 3600},
        {"reps": 5.0},
    ],
)
def test_set_accepts_boundaries(data):
    parsed = parse_input(WorkoutSetCreate, data)
    assert parsed.reps == int(data["reps"])


@pytest.mark.parametrize(
    "weight, expected",
    [
        ("100", Decimal("100")),
        ("82.5", Decimal("82.5")),
        ("82.55", Decimal("82.55")),
        ("9999.99", Decimal("9999.99")),
        (60, Decimal("60")),
        (62.5, Decimal("62.5")),
        (None, None),
        ("", None),
    ],
)
def test_set_weight_shapes(weight, expected):
    parsed = WorkoutSetCreate(reps=8, weight_kg=weight)
    assert parsed.weight_kg == expected


def test_set_reports_first_violation_only():
    # weight is checked before reps, reps before rest time
    assert _message(WorkoutSetCreate, {"weight_kg": "x", "reps": 0, "rest_time": -1}) == (
        "Weight must be a valid number"
    )
    assert _message(WorkoutSetCreate, {"reps": 0, "rest_time": -1}) == "At least 1 rep required"


def test_set_missing_reps_names_the_field():
    assert _message(WorkoutSetCreate, {}) == "reps: Field required"


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------


def test_workout_name_is_trimmed():
    assert WorkoutCreate(name="  Push day  ").name == "Push day"


def test_workout_name_is_optional():
    payload = WorkoutCreate()
    assert payload.name is None
    assert payload.started_at is None


@pytest.mark.parametrize(
    "name, message",
    [
        ("   ", "Name is required"),
        ("x" * 101, "Name must be less than 100 characters"),
    ],
)
def test_workout_name_bounds(name, message):
    assert _message(WorkoutCreate, {"name": name}) == message


def test_workout_name_of_100_characters_is_accepted():
    assert len(WorkoutCreate(name="x" * 100).name) == 100


def test_workout_started_at_coerces_iso_strings():
    payload = WorkoutCreate(started_at="2024-05-10T07:30:00Z")
    assert payload.started_at == datetime.fromisoformat("2024-05-10T07:30:00+00:00")


def test_workout_started_at_rejects_garbage():
    assert _message(WorkoutCreate, {"started_at": "not a date"}) == "Start time must be a valid date"


def test_workout_update_tracks_only_present_fields():
    payload = WorkoutUpdate(name="Legs")
    assert payload.model_dump(exclude_unset=True) == {"name": "Legs"}


def test_workout_update_rejects_bad_completion_time():
    assert _message(WorkoutUpdate, {"completed_at": "yesterday-ish"}) == "Completion time must be a valid date"


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


def test_add_exercise_requires_id_or_name():
    assert _message(WorkoutExerciseCreate, {}) == "Either exercise_id or exercise_name must be provided"


def test_add_exercise_accepts_id():
    exercise_id = uuid.uuid4()
    assert WorkoutExerciseCreate(exercise_id=exercise_id).exercise_id == exercise_id


def test_add_exercise_trims_name():
    assert WorkoutExerciseCreate(exercise_name="  Squat ").exercise_name == "Squat"


def test_exercise_name_bounds():
    assert _message(ExerciseCreate, {"name": "  "}) == "Exercise name is required"
    assert _message(ExerciseCreate, {"name": "x" * 201}) == "Exercise name must be at most 200 characters"


# ---------------------------------------------------------------------------
# first_error_message / parse_input
# ---------------------------------------------------------------------------


def test_first_error_message_strips_request_location():
    errors = [{"type": "uuid_parsing", "loc": ("path", "workout_id"), "msg": "Input should be a valid UUID"}]
    assert first_error_message(errors) == "workout_id: Input should be a valid UUID"


def test_first_error_message_without_errors():
    assert first_error_message([]) == "Invalid input"


def test_parse_input_passes_model_instances_through():
    payload = WorkoutSetCreate(reps=3)
    assert parse_input(WorkoutSetCreate, payload) is payload


def test_schema_errors_are_plain_validation_errors_outside_parse_input():
    with pytest.raises(ValidationError):
        WorkoutSetCreate(reps=0)
