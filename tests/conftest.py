import random

import pytest

from theorunner.core.state import State
from theorunner.engine.session import init_session
from theorunner.engine.tuning import SpawnCategory, Tuning
from theorunner.storage.best_score import BestScoreStoreError, MemoryBestScoreStore


class ScriptedRandom(random.Random):
    """Returns the given draws from random() in order."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)

    def random(self):
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        return self._values.pop(0)


class FailingStore:
    def __init__(self) -> None:
        self.save_attempts = 0

    def load(self) -> int:
        raise BestScoreStoreError("disk gone")

    def save(self, value: int) -> None:
        self.save_attempts += 1
        raise BestScoreStoreError("disk gone")


# Only tuna cans spawn, so a round can run forever
CANS_ONLY = Tuning(
    category_weights=(
        (SpawnCategory.TUNNEL, 0.0),
        (SpawnCategory.COLLECTIBLE, 1.0),
        (SpawnCategory.OBSTACLE, 0.0),
    ),
)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def store() -> MemoryBestScoreStore:
    return MemoryBestScoreStore(42)


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def session(rng, store):
    return init_session(store=store, rng=rng)


@pytest.fixture
def running_session(session):
    session.state.transition(State.RUNNING)
    return session


@pytest.fixture
def endless_session(rng, store):
    s = init_session(CANS_ONLY, store=store, rng=rng)
    s.state.transition(State.RUNNING)
    return s
