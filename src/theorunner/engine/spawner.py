"""Procedural spawning.

A single cursor tracks how far away the next spawn point is. It scrolls
toward the player at the current speed; once it is inside the visible field
a category is drawn from the weighted table and the cursor is re-armed with
a gap that shrinks as speed grows, so spacing feels constant.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from theorunner.engine.tuning import SpawnCategory, Tuning
from theorunner.engine.world import Collectible, Obstacle, ObstacleKind, SpawnBatch, Tunnel

logger = logging.getLogger(__name__)

# Object footprints relative to the ground line
TUNNEL_SIZE = (100.0, 60.0)
TUNNEL_RISE = 50.0
CAN_SIZE = (30.0, 20.0)
CAN_IN_TUNNEL_OFFSET = (35.0, 25.0)
CAN_ABOVE_OBSTACLE_RISE = 80.0
BARE_CAN_RISE = 45.0
ORANGE_SIZE = (30.0, 30.0)
ORANGE_RISE = 25.0
BAG_SIZE = (35.0, 40.0)
BAG_RISE = 35.0


@dataclass
class SpawnCursor:
    """Distance from the field's left edge to the next spawn point."""
    distance: float


def pick_category(tuning: Tuning, draw: float) -> SpawnCategory:
    """Map a draw in [0, 1) onto the weight table.

    Buckets are closed-open, so a draw sitting exactly on a boundary belongs
    to the bucket starting there.
    """
    target = draw * tuning.total_weight
    upper = 0.0
    chosen = None
    for category, weight in tuning.category_weights:
        if weight <= 0:
            continue
        upper += weight
        chosen = category
        if target < upper:
            return category
    # float rounding can leave target == total; fall into the last live bucket
    return chosen


def scaled_gap(tuning: Tuning, draw: float, speed: float) -> float:
    gap = tuning.min_gap + draw * (tuning.max_gap - tuning.min_gap)
    return gap * (tuning.base_speed / speed)


class SpawnScheduler:
    """Decides, per tick, whether something new enters the field."""

    def __init__(self, tuning: Tuning, rng: random.Random) -> None:
        self.tuning = tuning
        self.rng = rng

    def new_cursor(self) -> SpawnCursor:
        return SpawnCursor(distance=self.tuning.initial_spawn_distance)

    def tick(self, cursor: SpawnCursor, field_width: float, speed: float) -> Optional[SpawnBatch]:
        batch = None
        if field_width > 0 and cursor.distance <= field_width:
            category = pick_category(self.tuning, self.rng.random())
            batch = self._build(category, field_width)
            cursor.distance = field_width + scaled_gap(self.tuning, self.rng.random(), speed)
            logger.debug(
                f"Spawned {category.value} at x={field_width:.0f}, "
                f"next in {cursor.distance - field_width:.1f}"
            )

        cursor.distance -= speed
        return batch

    def _build(self, category: SpawnCategory, field_width: float) -> SpawnBatch:
        ground = self.tuning.ground_y

        if category is SpawnCategory.TUNNEL:
            dx, rise = CAN_IN_TUNNEL_OFFSET
            return SpawnBatch(
                tunnel=Tunnel(field_width, ground - TUNNEL_RISE, *TUNNEL_SIZE),
                collectible=Collectible(field_width + dx, ground - rise, *CAN_SIZE),
            )

        if category is SpawnCategory.COLLECTIBLE:
            return SpawnBatch(
                collectible=Collectible(field_width, ground - BARE_CAN_RISE, *CAN_SIZE),
            )

        if self.rng.random() > 0.5:
            obstacle = Obstacle(field_width, ground - ORANGE_RISE, *ORANGE_SIZE, kind=ObstacleKind.ORANGE)
        else:
            obstacle = Obstacle(field_width, ground - BAG_RISE, *BAG_SIZE, kind=ObstacleKind.BAG)

        collectible = None
        if self.rng.random() < self.tuning.collectible_chance:
            collectible = Collectible(field_width, ground - CAN_ABOVE_OBSTACLE_RISE, *CAN_SIZE)

        return SpawnBatch(obstacle=obstacle, collectible=collectible)
