"""
Shared fixtures for the hunt tests.

- In-memory store and a controller seeded with the default roster
- A controller with a team already selected
- A deterministic random generator and a manual clock for mini-games
"""

import random

import pytest

from codehunt.progression.controller import ProgressionController
from codehunt.storage.base import MemoryStore


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(namespace="test")


@pytest.fixture
def controller(store) -> ProgressionController:
    return ProgressionController(store)


@pytest.fixture
def playing(controller) -> ProgressionController:
    """Controller with Team A (code 123456) selected."""
    controller.select_team("1")
    return controller


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()
