"""The session aggregate and the public simulation API.

Everything the game needs between frames lives in one Session owned by the
host. Input handlers and ``tick`` mutate it in place and return the sound
cues the host should play; nothing here draws, plays audio or does file I/O
beyond the best-score write-through on a new record.

Typical host loop::

    session = init_session(store=JsonBestScoreStore(path))
    while running:
        if jump_pressed:
            events += on_jump_input(session)
        result = tick(session, field_width)
        render(get_render_snapshot(session))
"""

import copy
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from theorunner.core.events import Event, EventType, sound_event
from theorunner.core.state import State, StateMachine
from theorunner.engine import physics
from theorunner.engine.collision import hitbox, resolve
from theorunner.engine.physics import Actor
from theorunner.engine.spawner import SpawnCursor, SpawnScheduler
from theorunner.engine.tuning import CLASSIC, Tuning
from theorunner.engine.world import Cloud, Collectible, Obstacle, Tunnel, World, create_clouds
from theorunner.storage.best_score import BestScoreStore, load_best_score, save_best_score

logger = logging.getLogger(__name__)

DEFAULT_FIELD_WIDTH = 800.0


@dataclass
class Session:
    tuning: Tuning
    state: StateMachine
    actor: Actor
    world: World
    scheduler: SpawnScheduler
    cursor: SpawnCursor
    rng: random.Random
    store: Optional[BestScoreStore] = None
    reduced_motion: bool = False
    score: int = 0
    best_score: int = 0
    speed: float = 0.0
    shake: int = 0

    @property
    def mode(self) -> State:
        return self.state.state

    @property
    def display_score(self) -> int:
        return self.score // self.tuning.score_divisor


@dataclass
class TickEvents:
    """What one tick produced, in emission order."""
    events: List[Event] = field(default_factory=list)
    score: int = 0
    mode: State = State.NOT_STARTED
    new_best: bool = False


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only copy of everything a renderer needs."""
    actor: Actor
    obstacles: Tuple[Obstacle, ...]
    collectibles: Tuple[Collectible, ...]
    tunnels: Tuple[Tunnel, ...]
    clouds: Tuple[Cloud, ...]
    mode: State
    score: int
    best_score: int
    shake: int
    speed: float
    reduced_motion: bool


def init_session(
    tuning: Optional[Tuning] = None,
    *,
    store: Optional[BestScoreStore] = None,
    reduced_motion: bool = False,
    rng: Optional[random.Random] = None,
    field_width: float = DEFAULT_FIELD_WIDTH,
) -> Session:
    """Create a session on the title screen.

    The best score is read from ``store`` exactly once here; a failing store
    leaves it at 0.
    """
    tuning = tuning or CLASSIC
    rng = rng or random.Random()
    scheduler = SpawnScheduler(tuning, rng)

    session = Session(
        tuning=tuning,
        state=StateMachine(State.NOT_STARTED),
        actor=physics.create_actor(tuning),
        world=World(clouds=create_clouds(rng, field_width)),
        scheduler=scheduler,
        cursor=scheduler.new_cursor(),
        rng=rng,
        store=store,
        reduced_motion=reduced_motion,
        best_score=load_best_score(store),
        speed=tuning.base_speed,
    )
    logger.info(f"Session created, best score {session.best_score}")
    return session


def _reset_round(session: Session) -> None:
    session.actor = physics.create_actor(session.tuning)
    session.world.clear()
    session.cursor = session.scheduler.new_cursor()
    session.speed = session.tuning.base_speed
    session.score = 0
    session.shake = 0


def on_jump_input(session: Session) -> List[Event]:
    """Jump, start the first round, or restart after a crash."""
    mode = session.mode

    if mode == State.ENDED:
        return on_restart_input(session)

    if mode == State.NOT_STARTED:
        session.state.transition(State.RUNNING)

    if physics.request_jump(session.actor, session.tuning.jump_force):
        return [sound_event(EventType.PLAY_JUMP)]
    return []


def on_restart_input(session: Session) -> List[Event]:
    """Start a fresh round. Ignored unless the last round has ended."""
    if session.mode != State.ENDED:
        logger.debug(f"Restart ignored in {session.mode.name}")
        return []

    _reset_round(session)
    session.state.transition(State.RUNNING)
    return []


def ramp_speed(speed: float, tuning: Tuning) -> float:
    return min(tuning.max_speed, speed + tuning.speed_increment)


def _decay_shake(session: Session) -> None:
    if session.shake > 0:
        session.shake -= 1


def _end_round(session: Session, result: TickEvents) -> None:
    session.state.transition(State.ENDED)
    result.events.append(sound_event(EventType.PLAY_HIT))

    if not session.reduced_motion:
        session.shake = session.tuning.shake_ticks

    final = session.display_score
    logger.info(f"Round over at {final} (best {session.best_score})")
    if final > session.best_score:
        session.best_score = final
        result.new_best = True
        save_best_score(session.store, final)


def tick(session: Session, field_width: float) -> TickEvents:
    """Advance the simulation by one frame.

    Only a running session moves. An ended session keeps its world frozen
    and just lets the shake countdown settle.
    """
    result = TickEvents()

    if session.mode == State.RUNNING:
        tuning = session.tuning
        session.speed = ramp_speed(session.speed, tuning)

        physics.advance(session.actor, tuning.gravity, tuning.ground_y)
        physics.animate(session.actor, session.speed, tuning.frame_step)

        session.world.advance(session.speed, field_width, session.rng)

        batch = session.scheduler.tick(session.cursor, field_width, session.speed)
        if batch is not None:
            session.world.add(batch)

        outcome = resolve(
            hitbox(session.actor, tuning),
            session.world.tunnels,
            session.world.obstacles,
            session.world.collectibles,
        )
        if outcome.round_ended:
            # The crash tick scores nothing: no survival point, no cans,
            # and shake starts decaying from the next tick.
            _end_round(session, result)
        else:
            for _ in outcome.collected:
                session.score += tuning.collectible_bonus
                result.events.append(sound_event(EventType.PLAY_COLLECT))
            session.score += 1
            _decay_shake(session)

    elif session.mode == State.ENDED:
        _decay_shake(session)

    result.score = session.display_score
    result.mode = session.mode
    return result


def get_render_snapshot(session: Session) -> RenderSnapshot:
    world = session.world
    return RenderSnapshot(
        actor=copy.copy(session.actor),
        obstacles=tuple(copy.copy(o) for o in world.obstacles),
        collectibles=tuple(copy.copy(c) for c in world.collectibles),
        tunnels=tuple(copy.copy(t) for t in world.tunnels),
        clouds=tuple(copy.copy(c) for c in world.clouds),
        mode=session.mode,
        score=session.display_score,
        best_score=session.best_score,
        shake=session.shake,
        speed=session.speed,
        reduced_motion=session.reduced_motion,
    )
