"""Actor state and vertical physics."""

from dataclasses import dataclass

from theorunner.engine.tuning import Tuning


@dataclass
class Actor:
    """Theo. ``y`` is the feet position, so the sprite spans ``y - height`` to ``y``."""
    x: float
    y: float
    width: float
    height: float
    vy: float = 0.0
    airborne: bool = False
    frame: int = 0
    frame_time: float = 0.0


def create_actor(tuning: Tuning) -> Actor:
    return Actor(
        x=tuning.actor_x,
        y=tuning.ground_y,
        width=tuning.actor_width,
        height=tuning.actor_height,
    )


def advance(actor: Actor, gravity: float, ground_y: float) -> None:
    """Integrate one tick of gravity and clamp to the ground."""
    actor.vy += gravity
    actor.y += actor.vy

    if actor.y >= ground_y:
        actor.y = ground_y
        actor.vy = 0.0
        actor.airborne = False


def request_jump(actor: Actor, jump_force: float) -> bool:
    """Launch the actor if grounded.

    Returns True when the jump happened, so the caller can emit the sound cue.
    """
    if actor.airborne:
        return False
    actor.vy = jump_force
    actor.airborne = True
    return True


def animate(actor: Actor, speed: float, frame_step: float) -> None:
    """Flip the two-frame leg cycle once enough ground has passed."""
    actor.frame_time += speed
    if actor.frame_time > frame_step:
        actor.frame = (actor.frame + 1) % 2
        actor.frame_time = 0.0
