from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .models import Booking, Feedback, Notification, Practitioner, Therapy

COLLECTIONS = ("therapies", "practitioners", "bookings", "notifications", "feedback")


@dataclass
class MockDatabase:
    """In-memory collections; records live as long as the process."""
    therapies: list[Therapy] = field(default_factory=list)
    practitioners: list[Practitioner] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    feedback: list[Feedback] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in COLLECTIONS)


_database = MockDatabase()
_lock = threading.RLock()


def reset_db() -> None:
    """Empty every collection. Used by the tests."""
    with _lock:
        for name in COLLECTIONS:
            setattr(_database, name, [])


def next_id(records: list) -> int:
    return max((r.id for r in records), default=0) + 1


@contextmanager
def db_read() -> Iterator[MockDatabase]:
    """Lock-only access for queries; nothing is copied or restored."""
    with _lock:
        yield _database


@contextmanager
def db_session() -> Iterator[MockDatabase]:
    """
    Context manager around the shared store for writes:
    - holds the lock for the whole block
    - on exceptions restores the collections as they were on entry
    """
    with _lock:
        snapshot = {name: copy.deepcopy(getattr(_database, name)) for name in COLLECTIONS}
        try:
            yield _database
        except Exception:
            for name, records in snapshot.items():
                setattr(_database, name, records)
            raise
