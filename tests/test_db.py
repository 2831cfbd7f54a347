"""Tests for the in-memory store."""
import pytest

from ayursutra import db as store
from ayursutra.db import db_read, db_session, next_id, reset_db
from ayursutra.models import Feedback
from ayursutra.seed import seed_base


def test_seed_counts():
    with db_session() as db:
        assert len(db.therapies) == 6
        assert len(db.practitioners) == 4
        assert len(db.bookings) == 4
        assert len(db.notifications) == 5
        assert len(db.feedback) == 3


def test_seed_is_idempotent():
    seed_base()
    with db_session() as db:
        assert len(db.therapies) == 6
        assert len(db.notifications) == 5


def test_ids_unique_per_collection():
    with db_session() as db:
        for records in (db.therapies, db.practitioners, db.bookings, db.notifications, db.feedback):
            ids = [r.id for r in records]
            assert len(ids) == len(set(ids))


def test_seeded_days_within_course():
    with db_session() as db:
        for b in db.bookings:
            assert 0 <= b.day <= b.total_days


def test_next_id():
    assert next_id([]) == 1
    with db_session() as db:
        assert next_id(db.bookings) == 5


def test_session_rolls_back_on_error():
    with pytest.raises(RuntimeError):
        with db_session() as db:
            db.feedback.append(Feedback(id=99, booking_id=1, patient_name="X", rating=3, date="2025-01-01"))
            db.bookings[0].day = 0
            raise RuntimeError("boom")

    with db_session() as db:
        assert [f.id for f in db.feedback] == [1, 2, 3]
        assert db.bookings[0].day == 3


def test_reset_empties_store():
    reset_db()
    with db_session() as db:
        assert db.is_empty()


def test_read_yields_live_store_without_copying(monkeypatch):
    calls = []
    monkeypatch.setattr(store.copy, "deepcopy", lambda obj, *a: calls.append(obj) or obj)

    with db_read() as db:
        assert len(db.therapies) == 6

    assert calls == []
