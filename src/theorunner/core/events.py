"""
Event bus for Theo Runner.

The simulation core never plays sounds or touches the screen itself; it
returns Event objects and the window queues them here. Input is emitted
straight away, everything the core produces is drained once per frame.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events flowing between the session and the host."""
    # Sound requests returned by the core
    PLAY_JUMP = auto()
    PLAY_COLLECT = auto()
    PLAY_HIT = auto()

    # Session changes queued by the window
    MODE_CHANGED = auto()
    NEW_BEST = auto()

    # Player input
    JUMP_INPUT = auto()
    RESTART_INPUT = auto()
    TOGGLE_SOUND = auto()


SOUND_EVENTS = frozenset({EventType.PLAY_JUMP, EventType.PLAY_COLLECT, EventType.PLAY_HIT})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: What happened
        data: Event payload
        source: Who produced it (engine, session, keyboard, mouse)
        timestamp: Monotonic creation time
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Routes events to per-type handlers.

    ``emit`` runs synchronous handlers immediately and is used for input.
    ``queue_event`` defers delivery to ``process_queue``, which also awaits
    coroutine handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """Register a handler. Returns a function that removes it again."""
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver to synchronous handlers now. Coroutine handlers are skipped."""
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        self._queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver every queued event in order, awaiting coroutine handlers."""
        while not self._queue.empty():
            event = await self._queue.get()
            await self._dispatch(event)
            self._queue.task_done()

    async def _dispatch(self, event: Event) -> None:
        tasks = []
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                self._call(handler, event)

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in {event.type.name} handler: {result}")

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in {event.type.name} handler: {e}")


def sound_event(event_type: EventType, source: str = "engine") -> Event:
    """Create a sound request event."""
    if event_type not in SOUND_EVENTS:
        raise ValueError(f"{event_type} is not a sound event")
    return Event(event_type, source=source)


def jump_input_event(source: str = "keyboard") -> Event:
    return Event(EventType.JUMP_INPUT, source=source)


def restart_input_event(source: str = "keyboard") -> Event:
    return Event(EventType.RESTART_INPUT, source=source)
