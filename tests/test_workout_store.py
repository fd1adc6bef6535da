import json

import pytest

from workout_mapper.errors import PersistenceError
from workout_mapper.storage.data_models import Cycling, Running, WorkoutType
from workout_mapper.storage.workout_store import WorkoutStore

from conftest import CREATED_AT, FailingStore


def _fill(store):
    store.create(WorkoutType.RUNNING, (1.0, 1.0), 5, 30, 178)
    store.create(WorkoutType.CYCLING, (2.0, 2.0), 20, 60, 523)
    store.create("running", (3.0, 3.0), 10, 55, 170)


def test_create_appends_in_creation_order(store):
    _fill(store)
    assert store.size() == 3
    assert len(store) == 3
    assert [w.coordinates for w in store.all()] == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]
    assert [type(w) for w in store.all()] == [Running, Cycling, Running]


def test_created_ids_are_unique_even_within_one_millisecond(store):
    _fill(store)
    ids = [w.id for w in store.all()]
    assert len(set(ids)) == 3
    assert ids == sorted(ids)


def test_all_is_read_only(store):
    _fill(store)
    snapshot = store.all()
    assert isinstance(snapshot, tuple)
    assert store.size() == 3


def test_find_by_id(store):
    _fill(store)
    second = store.all()[1]
    assert store.find_by_id(second.id) is second
    assert store.find_by_id(-1) is None


def test_serialize_rehydrate_round_trip(store, kv, clock):
    _fill(store)
    blob = store.serialize()

    other = WorkoutStore(kv, clock=clock)
    other.rehydrate(blob)

    assert [w.to_dict() for w in other.all()] == [w.to_dict() for w in store.all()]
    assert other.all()[0].timestamp == CREATED_AT
    assert other.all()[1].speed == 20.0


def test_serialize_contains_structural_fields(store):
    store.create(WorkoutType.RUNNING, (1.0, 1.0), 5, 30, 178)
    row = json.loads(store.serialize())[0]
    assert set(row) == {
        'id', 'timestamp', 'coordinates', 'distance', 'duration', 'type',
        'description', 'interactionCount', 'cadence', 'pace',
    }


def test_rehydrate_replaces_collection(store):
    _fill(store)
    store.rehydrate(json.dumps([]))
    assert store.size() == 0


def test_rehydrate_without_snapshot_is_empty(store):
    _fill(store)
    store.rehydrate(None)
    assert store.all() == ()


def test_rehydrate_malformed_snapshot(store):
    _fill(store)
    with pytest.raises(PersistenceError):
        store.rehydrate("{not json")
    assert store.size() == 0


def test_rehydrate_advances_id_clock(store, kv):
    blob = json.dumps([{
        'id': 1_800_000_000_000, 'timestamp': CREATED_AT.isoformat(), 'coordinates': [0, 0],
        'distance': 5, 'duration': 30, 'type': 'running', 'description': 'Running on March 7',
        'cadence': 170, 'pace': 6.0,
    }])
    store.rehydrate(blob)
    new = store.create(WorkoutType.RUNNING, (0.0, 0.0), 1, 5, 160)
    assert new.id == 1_800_000_000_001


def test_persist_and_load(store, kv, clock):
    _fill(store)
    store.persist()
    assert kv.get("workouts") == store.serialize()

    fresh = WorkoutStore(kv, clock=clock)
    fresh.load()
    assert fresh.size() == 3


def test_persist_failure_keeps_memory(clock):
    store = WorkoutStore(FailingStore(), clock=clock)
    store.create(WorkoutType.RUNNING, (1.0, 1.0), 5, 30, 178)
    with pytest.raises(PersistenceError):
        store.persist()
    assert store.size() == 1


def test_reset_clears_collection_and_snapshot(store, kv, clock):
    _fill(store)
    store.persist()
    store.reset()
    assert store.size() == 0
    assert kv.get("workouts") is None

    fresh = WorkoutStore(kv, clock=clock)
    fresh.load()
    assert fresh.size() == 0


def test_custom_key(kv, clock):
    store = WorkoutStore(kv, key="mine", clock=clock)
    store.create(WorkoutType.RUNNING, (1.0, 1.0), 5, 30, 178)
    store.persist()
    assert "mine" in kv
    assert "workouts" not in kv


def test_to_dataframe(store):
    _fill(store)
    df = store.to_dataframe()
    assert list(df['type']) == ['running', 'cycling', 'running']
    assert list(df['latitude']) == [1.0, 2.0, 3.0]
    assert 'coordinates' not in df.columns


def test_to_dataframe_empty(store):
    assert store.to_dataframe().empty
