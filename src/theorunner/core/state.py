"""
State machine for a Theo Runner session.

States:
    NOT_STARTED: Title screen, waiting for the first jump
    RUNNING: Round in progress, the world advances every tick
    ENDED: Actor hit an obstacle, world frozen until restart
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session modes."""
    NOT_STARTED = auto()
    RUNNING = auto()
    ENDED = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Tracks the session mode and refuses transitions that are not listed.

    Listeners are notified after every successful transition; a failing
    listener is logged and does not block the transition.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.NOT_STARTED, State.RUNNING),  # First jump
        (State.RUNNING, State.ENDED),        # Obstacle collision
        (State.ENDED, State.RUNNING),        # Restart
    ]

    def __init__(self, initial_state: State = State.NOT_STARTED) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)
