"""Shared fixtures for photo_review tests."""

import json
import threading

import pytest

from photo_review.gallery.models import make_photo
from photo_review.gallery.storage import StorageError
from photo_review.review.session import ReviewSession


class FakeStorage:
    """Records every body written; can be told to fail."""

    def __init__(self, fail_with: Exception | None = None):
        self.fail_with = fail_with
        self.bodies: list[str] = []
        self.lock = threading.Lock()

    def write(self, body: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        with self.lock:
            self.bodies.append(body)

    @property
    def writes(self) -> list[list[dict]]:
        return [json.loads(b) for b in self.bodies]


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def failing_storage():
    return FakeStorage(fail_with=StorageError("connection refused"))


@pytest.fixture
def two_photos():
    return [
        make_photo("p1", "/photos/p1.jpg"),
        make_photo("p2", "/photos/p2.jpg"),
    ]


@pytest.fixture
def make_session(storage):
    sessions: list[ReviewSession] = []

    def _make(photos, backend=None, **kwargs):
        kwargs.setdefault("settle_delay", 0)
        session = ReviewSession(photos, backend or storage, **kwargs)
        sessions.append(session)
        return session

    yield _make
    for session in sessions:
        session.close()


@pytest.fixture
def storage_factory():
    return FakeStorage
