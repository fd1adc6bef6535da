import math

import pytest

from workout_mapper.core.validator import FormInput, parse_number, validate, validate_form
from workout_mapper.errors import InvalidInput
from workout_mapper.storage.data_models import WorkoutType


@pytest.mark.parametrize("raw, expected", [
    ("5", 5.0),
    (" 2.5 ", 2.5),
    ("", 0.0),
    (None, 0.0),
    (7, 7.0),
    ("-50", -50.0),
])
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_parse_number_garbage_is_nan():
    assert math.isnan(parse_number("abc"))


def test_valid_running():
    assert validate("running", 5, 30, 178) == (5, 30, 178)


@pytest.mark.parametrize("distance, duration, cadence", [
    (0, 30, 10),
    (-5, 10, 10),
    (5, 0, 10),
    (5, 30, -1),
    (5, math.inf, 10),
    (math.nan, 30, 10),
])
def test_running_rejects_non_positive_or_non_finite(distance, duration, cadence):
    with pytest.raises(InvalidInput):
        validate(WorkoutType.RUNNING, distance, duration, cadence)


def test_cycling_accepts_negative_elevation():
    assert validate("cycling", 10, 30, -50) == (10, 30, -50)


def test_cycling_rejects_non_finite_elevation():
    with pytest.raises(InvalidInput):
        validate("cycling", 10, 30, math.nan)


def test_cycling_rejects_non_positive_distance():
    with pytest.raises(InvalidInput):
        validate("cycling", 0, 30, 100)


def test_unknown_type():
    with pytest.raises(InvalidInput):
        validate("swimming", 1, 1, 1)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        validate("running", -1, 1, 1)


def test_validate_form_picks_cadence_for_running():
    result = validate_form(FormInput("running", "5", "30", cadence="178", elevation="oops"))
    assert result.workout_type is WorkoutType.RUNNING
    assert (result.distance, result.duration, result.extra) == (5.0, 30.0, 178.0)


def test_validate_form_picks_elevation_for_cycling():
    result = validate_form(FormInput("cycling", "20", "60", cadence="", elevation="-12"))
    assert result.workout_type is WorkoutType.CYCLING
    assert result.extra == -12.0


def test_validate_form_blank_cadence_fails():
    with pytest.raises(InvalidInput):
        validate_form(FormInput("running", "5", "30", cadence=""))
