"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest

from pitch_tracker.services.session_store import SessionStore
from tests.fakes.storage import FakeSessionStorage

if TYPE_CHECKING:
    from collections.abc import Callable


class FakeClock:
    """Clock returning a fixed epoch time that tests can advance."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def storage() -> FakeSessionStorage:
    return FakeSessionStorage()


@pytest.fixture
def store(storage: FakeSessionStorage, clock: FakeClock, id_factory: Callable[[], str]) -> SessionStore:
    """An empty session backed by in-memory storage, deterministic ids and time."""
    return SessionStore(storage, clock=clock, id_factory=id_factory)


@pytest.fixture
def live_store(store: SessionStore) -> SessionStore:
    """A session with a game, a pitcher and one active batter."""
    store.start_game("Rivals", "Memorial Field")
    store.set_pitcher("Lopez")
    store.add_batter(7, "Smith", "Right")
    return store
