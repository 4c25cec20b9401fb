import asyncio

import pytest

from theorunner.core.events import EventBus, EventType, jump_input_event, restart_input_event
from theorunner.core.state import State
from theorunner.engine.world import Obstacle
from theorunner.settings import DisplaySettings
from theorunner.simulator.window import RunnerWindow


QUEUED = (
    EventType.MODE_CHANGED,
    EventType.NEW_BEST,
    EventType.PLAY_JUMP,
    EventType.PLAY_COLLECT,
    EventType.PLAY_HIT,
)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def received(bus):
    seen = []
    for event_type in QUEUED:
        bus.subscribe(event_type, lambda e: seen.append(e.type))
    return seen


@pytest.fixture
def window(session, bus):
    return RunnerWindow(session, bus, DisplaySettings(field_width=200, field_height=100))


def drained(bus, received):
    asyncio.run(bus.process_queue())
    return received


def test_jump_input_starts_round(window, bus, session, received) -> None:
    bus.emit(jump_input_event())

    assert session.mode == State.RUNNING
    assert drained(bus, received)[-2:] == [EventType.MODE_CHANGED, EventType.PLAY_JUMP]


def test_crash_queues_hit_and_new_best(window, bus, session, received) -> None:
    bus.emit(jump_input_event())
    session.actor.airborne = False
    session.actor.vy = 0.0
    session.score = 5000
    session.world.obstacles.append(Obstacle(90, 295, 30, 30))

    window._step()

    types = drained(bus, received)
    assert session.mode == State.ENDED
    assert types[-3:] == [EventType.MODE_CHANGED, EventType.PLAY_HIT, EventType.NEW_BEST]


def test_restart_input_after_crash(window, bus, session, received) -> None:
    session.state.transition(State.RUNNING)
    session.world.obstacles.append(Obstacle(90, 295, 30, 30))
    window._step()
    assert session.mode == State.ENDED

    bus.emit(restart_input_event())

    assert session.mode == State.RUNNING
    assert len(session.world) == 0
