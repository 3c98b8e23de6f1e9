"""Shared test helpers."""

import pytest
from fastapi.testclient import TestClient

from contest_vote.main import create_app
from contest_vote.models import Registration
from contest_vote.store import JsonDocumentStore
from contest_vote.voting import VotingService


class FakeRegistrations:
    """In-memory registration source; raises `error` when set."""

    def __init__(self, registrations=None, error=None):
        self.registrations = list(registrations or [])
        self.error = error
        self.calls = 0

    def list_registrations(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.registrations)


def make_registration(full_name: str, activity: str, department: str = "Eng") -> Registration:
    return Registration(
        timestamp="1/1/2025 10:00:00",
        fullName=full_name,
        department=department,
        activity=activity,
        imageUrl="",
    )


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir):
    return JsonDocumentStore(data_dir)


@pytest.fixture
def voting(store):
    return VotingService(store)


@pytest.fixture
def registrations():
    return FakeRegistrations(
        [
            make_registration("Alice", "Dance"),
            make_registration("Bob", "Dance"),
            make_registration("Carol", "Sing"),
        ]
    )


@pytest.fixture
def client(data_dir, registrations):
    app = create_app(data_dir=data_dir, registrations=registrations, activities=["Dance", "Sing"])
    return TestClient(app)
