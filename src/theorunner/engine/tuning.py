"""Physics, spawn and difficulty constants.

Two fixed presets ship with the game. ``classic`` is the standard daytime
run; ``night`` is the calmer evening variant that also drops bare tuna cans
between obstacles.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class SpawnCategory(Enum):
    """What the spawn scheduler can emit in one decision."""
    TUNNEL = "tunnel"            # tunnel with a tuna can inside
    COLLECTIBLE = "collectible"  # bare tuna can
    OBSTACLE = "obstacle"        # orange or bag, maybe a can above it


@dataclass(frozen=True)
class Tuning:
    """Every number the simulation core depends on."""

    # Physics (per tick)
    gravity: float = 0.6
    jump_force: float = -12.0

    # Difficulty ramp
    base_speed: float = 5.0
    max_speed: float = 12.0
    speed_increment: float = 0.001

    # Actor sprite, feet at (actor_x, ground_y)
    actor_x: float = 80.0
    actor_width: float = 50.0
    actor_height: float = 40.0
    ground_y: float = 320.0

    # Hitbox inset from the sprite bounds: left, top, right, bottom
    hitbox_inset: Tuple[float, float, float, float] = (5.0, 5.0, 5.0, 0.0)

    # Spawning
    initial_spawn_distance: float = 500.0
    min_gap: float = 200.0
    max_gap: float = 400.0
    category_weights: Tuple[Tuple[SpawnCategory, float], ...] = (
        (SpawnCategory.TUNNEL, 0.15),
        (SpawnCategory.COLLECTIBLE, 0.0),
        (SpawnCategory.OBSTACLE, 0.85),
    )
    collectible_chance: float = 0.3  # can above an obstacle

    # Scoring and effects
    collectible_bonus: int = 100
    score_divisor: int = 10
    shake_ticks: int = 15
    frame_step: float = 10.0  # speed accumulated per leg-animation frame

    def __post_init__(self) -> None:
        if self.gravity <= 0:
            raise ValueError("gravity must be positive")
        if self.jump_force >= 0:
            raise ValueError("jump_force must be negative (upward)")
        if not 0 < self.base_speed <= self.max_speed:
            raise ValueError("need 0 < base_speed <= max_speed")
        if self.speed_increment < 0:
            raise ValueError("speed_increment must not be negative")
        if not 0 <= self.min_gap <= self.max_gap:
            raise ValueError("need 0 <= min_gap <= max_gap")
        if any(weight < 0 for _, weight in self.category_weights):
            raise ValueError("category weights must not be negative")
        if self.total_weight <= 0:
            raise ValueError("category weights must not all be zero")
        if not 0 <= self.collectible_chance <= 1:
            raise ValueError("collectible_chance must be within [0, 1]")
        if self.score_divisor <= 0:
            raise ValueError("score_divisor must be positive")

    @property
    def total_weight(self) -> float:
        return sum(weight for _, weight in self.category_weights)


CLASSIC = Tuning()

NIGHT = Tuning(
    gravity=0.55,
    jump_force=-11.5,
    base_speed=4.5,
    max_speed=10.0,
    speed_increment=0.0008,
    min_gap=240.0,
    max_gap=440.0,
    category_weights=(
        (SpawnCategory.TUNNEL, 0.12),
        (SpawnCategory.COLLECTIBLE, 0.18),
        (SpawnCategory.OBSTACLE, 0.70),
    ),
    collectible_chance=0.25,
)

PRESETS: Dict[str, Tuning] = {
    "classic": CLASSIC,
    "night": NIGHT,
}


def get_tuning(name: str) -> Tuning:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown tuning '{name}', expected one of {sorted(PRESETS)}"
        ) from None
