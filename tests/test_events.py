import asyncio

import pytest

from theorunner.core.events import (
    Event,
    EventBus,
    EventType,
    jump_input_event,
    restart_input_event,
    sound_event,
)


def test_emit_reaches_only_matching_handlers() -> None:
    bus = EventBus()
    jumps, hits = [], []
    bus.subscribe(EventType.PLAY_JUMP, jumps.append)
    bus.subscribe(EventType.PLAY_HIT, hits.append)

    bus.emit(sound_event(EventType.PLAY_JUMP))

    assert [e.type for e in jumps] == [EventType.PLAY_JUMP]
    assert hits == []


def test_unsubscribe_stops_delivery() -> None:
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.JUMP_INPUT, received.append)

    bus.emit(jump_input_event())
    unsubscribe()
    bus.emit(jump_input_event())

    assert len(received) == 1


def test_handler_errors_are_contained() -> None:
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.PLAY_COLLECT, broken)
    bus.subscribe(EventType.PLAY_COLLECT, received.append)
    bus.emit(sound_event(EventType.PLAY_COLLECT))

    assert len(received) == 1


def test_queued_events_are_delivered_in_order() -> None:
    bus = EventBus()
    seen = []
    for event_type in (EventType.PLAY_HIT, EventType.MODE_CHANGED):
        bus.subscribe(event_type, lambda e: seen.append(e.type))

    bus.queue_event(sound_event(EventType.PLAY_HIT))
    bus.queue_event(Event(EventType.MODE_CHANGED, data={"to": "ENDED"}))
    assert seen == []

    asyncio.run(bus.process_queue())

    assert seen == [EventType.PLAY_HIT, EventType.MODE_CHANGED]


def test_queue_awaits_coroutine_handlers() -> None:
    bus = EventBus()
    seen = []

    async def on_hit(event):
        seen.append(("async", event.type))

    async def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.PLAY_HIT, on_hit)
    bus.subscribe(EventType.PLAY_HIT, broken)
    bus.subscribe(EventType.PLAY_HIT, lambda e: seen.append(("sync", e.type)))

    bus.queue_event(sound_event(EventType.PLAY_HIT))
    asyncio.run(bus.process_queue())

    assert ("sync", EventType.PLAY_HIT) in seen
    assert ("async", EventType.PLAY_HIT) in seen


def test_emit_skips_coroutine_handlers() -> None:
    bus = EventBus()
    seen = []

    async def handler(event):
        seen.append(event)

    bus.subscribe(EventType.RESTART_INPUT, handler)
    bus.emit(restart_input_event())
    assert seen == []


def test_sound_event_rejects_other_types() -> None:
    assert sound_event(EventType.PLAY_JUMP).source == "engine"
    with pytest.raises(ValueError):
        sound_event(EventType.NEW_BEST)
