"""Position counters: exercise order starts at 0, set numbers at 1."""

import pytest

from app.core.constants import EXERCISE_ORDER_START, SET_NUMBER_START
from app.services.ordering import next_position

pytestmark = pytest.mark.unit


def test_first_exercise_order_is_zero():
    assert next_position([], EXERCISE_ORDER_START) == 0


def test_first_set_number_is_one():
    assert next_position([], SET_NUMBER_START) == 1


def test_next_is_max_plus_one_not_count():
    # gaps left by deletes are not filled
    assert next_position([1, 3], SET_NUMBER_START) == 4


def test_unordered_siblings():
    assert next_position([2, 0, 1], EXERCISE_ORDER_START) == 3


def test_none_values_are_ignored():
    # SELECT max(...) over no rows yields NULL
    assert next_position([None], SET_NUMBER_START) == 1
    assert next_position([None], EXERCISE_ORDER_START) == 0
    assert next_position([None, 4], SET_NUMBER_START) == 5


def test_start_values_stay_distinct():
    assert EXERCISE_ORDER_START != SET_NUMBER_START
