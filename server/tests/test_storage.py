# server/tests/test_storage.py

import pytest

from launcher.extensions import db
from launcher.models import AppEntry
from launcher.services.storage import (
    DatabaseStorage,
    MemoryStorage,
    StorageError,
    create_storage,
)


def make_entries(storage, *names):
    return [storage.create({"name": name, "url": f"https://{name.lower()}.example.com"}) for name in names]


def test_create_storage_picks_backend():
    assert isinstance(create_storage("memory"), MemoryStorage)
    assert isinstance(create_storage("DATABASE"), DatabaseStorage)

    with pytest.raises(ValueError):
        create_storage("redis")


def test_storage_round_trip(app):
    with app.app_context():
        storage = app.storage
        github, twitter = make_entries(storage, "GitHub", "Twitter")

        assert [entry.id for entry in storage.list()] == [github.id, twitter.id]
        assert github.position == 0
        assert github.category is None

        assert storage.delete(github.id) is True
        assert storage.delete(github.id) is False
        assert [entry.id for entry in storage.list()] == [twitter.id]


def test_update_positions_yields_dense_order(app):
    with app.app_context():
        storage = app.storage
        a, b, c = make_entries(storage, "A", "B", "C")

        storage.update_positions([
            {"id": c.id, "position": 0},
            {"id": a.id, "position": 1},
            {"id": b.id, "position": 2},
        ])

        positions = {entry.id: entry.position for entry in storage.list()}
        assert positions == {c.id: 0, a.id: 1, b.id: 2}


def test_memory_storage_never_reuses_deleted_ids():
    storage = MemoryStorage()
    seen = set()

    for _ in range(20):
        entry = storage.create({"name": "App", "url": "https://example.com"})
        assert entry.id not in seen
        seen.add(entry.id)
        storage.delete(entry.id)


def test_database_position_batch_rolls_back_on_failure(db_app):
    with db_app.app_context():
        storage = db_app.storage
        a, b = make_entries(storage, "A", "B")
        a_id, b_id = a.id, b.id

        # The driver refuses to bind the second value, after the first update is staged
        with pytest.raises(StorageError):
            storage.update_positions([
                {"id": a_id, "position": 1},
                {"id": b_id, "position": 2 ** 70},
            ])

        positions = {entry.id: entry.position for entry in AppEntry.query.all()}
        assert positions == {a_id: 0, b_id: 0}


def test_database_list_wraps_driver_errors(db_app):
    with db_app.app_context():
        db.drop_all()

        with pytest.raises(StorageError):
            db_app.storage.list()

        db.create_all()


def test_database_ping(db_app):
    with db_app.app_context():
        db_app.storage.ping()
