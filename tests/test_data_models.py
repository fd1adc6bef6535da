from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from workout_mapper.storage.data_models import (
    Cycling,
    Running,
    WorkoutIdClock,
    WorkoutType,
    describe,
    workout_from_dict,
)

WHEN = datetime(2024, 3, 7, 8, 30)


def test_running_pace_and_description():
    run = Running.new(1, WHEN, (10.0, 20.0), distance=5, duration=30, cadence=178)
    assert run.pace == 6.0
    assert run.description == "Running on March 7"
    assert run.type is WorkoutType.RUNNING
    assert run.interaction_count == 0


def test_cycling_speed_and_description():
    ride = Cycling.new(2, WHEN, (10.0, 20.0), distance=20, duration=60, elevation_gain=523)
    assert ride.speed == 20.0
    assert ride.description == "Cycling on March 7"


def test_description_uses_month_name_and_day():
    assert describe(WorkoutType.CYCLING, datetime(2023, 12, 25)) == "Cycling on December 25"
    assert describe(WorkoutType.RUNNING, datetime(2023, 1, 1)) == "Running on January 1"


def test_coordinates_are_stored_as_tuple():
    run = Running.new(1, WHEN, [1.5, 2.5], distance=1, duration=5, cadence=160)
    assert run.coordinates == (1.5, 2.5)
    assert isinstance(run.coordinates, tuple)


def test_click_only_touches_interaction_count():
    run = Running.new(1, WHEN, (0.0, 0.0), distance=5, duration=30, cadence=178)
    run.click()
    run.click()
    assert run.interaction_count == 2
    assert run.pace == 6.0


@pytest.mark.parametrize("field, value", [
    ("distance", 99.0),
    ("duration", 1.0),
    ("coordinates", (0.0, 1.0)),
    ("pace", 1.0),
])
def test_workout_fields_are_frozen(field, value):
    run = Running.new(1, WHEN, (0.0, 0.0), distance=5, duration=30, cadence=178)
    with pytest.raises(FrozenInstanceError):
        setattr(run, field, value)
    assert run.distance == 5
    assert run.pace == 6.0


def test_rehydrated_workout_is_frozen_but_clickable():
    ride = Cycling.new(2, WHEN, (1.0, 2.0), distance=20, duration=60, elevation_gain=100)
    rebuilt = workout_from_dict(ride.to_dict())
    with pytest.raises(FrozenInstanceError):
        rebuilt.speed = 5.0
    rebuilt.click()
    assert rebuilt.interaction_count == 1
    assert rebuilt.speed == 20.0


def test_snapshot_keys():
    ride = Cycling.new(7, WHEN, (1.0, 2.0), distance=10, duration=30, elevation_gain=-50)
    data = ride.to_dict()
    assert data == {
        'id': 7,
        'timestamp': WHEN.isoformat(),
        'coordinates': [1.0, 2.0],
        'distance': 10,
        'duration': 30,
        'type': 'cycling',
        'description': 'Cycling on March 7',
        'interactionCount': 0,
        'elevationGain': -50,
        'speed': 20.0,
    }


def test_rebuilt_workout_keeps_stored_derived_values():
    data = Running.new(3, WHEN, (1.0, 2.0), distance=5, duration=30, cadence=178).to_dict()
    # A stored pace is taken as-is, never recomputed from distance/duration
    data['pace'] = 5.5
    rebuilt = workout_from_dict(data)
    assert isinstance(rebuilt, Running)
    assert rebuilt.pace == 5.5
    assert rebuilt.timestamp == WHEN


def test_unknown_type_in_snapshot_is_rejected():
    data = Running.new(3, WHEN, (1.0, 2.0), distance=5, duration=30, cadence=178).to_dict()
    data['type'] = 'swimming'
    with pytest.raises(ValueError):
        workout_from_dict(data)


def test_id_clock_uses_timestamp_when_it_moves_forward():
    ticks = iter([1000, 2000])
    clock = WorkoutIdClock(now_ms=lambda: next(ticks))
    assert clock.next_id() == 1000
    assert clock.next_id() == 2000


def test_id_clock_never_repeats_within_a_millisecond():
    clock = WorkoutIdClock(now_ms=lambda: 5000)
    ids = [clock.next_id() for _ in range(3)]
    assert ids == [5000, 5001, 5002]


def test_id_clock_advance_past():
    clock = WorkoutIdClock(now_ms=lambda: 10)
    clock.advance_past(99)
    assert clock.next_id() == 100
