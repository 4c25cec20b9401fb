"""World objects and the registry that scrolls and prunes them.

Gameplay objects (obstacles, tuna cans, tunnels) scroll at the global speed
and are dropped once their trailing edge leaves the field. Clouds drift at
their own parallax speed and wrap back to the right edge instead.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

CLOUD_COUNT = 5


class Rect(NamedTuple):
    """Axis-aligned box, y grows downward."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class ObstacleKind(Enum):
    ORANGE = "orange"
    BAG = "bag"


@dataclass
class WorldObject:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class Obstacle(WorldObject):
    kind: ObstacleKind = ObstacleKind.ORANGE


@dataclass
class Collectible(WorldObject):
    """A tuna can, worth a bonus once."""
    collected: bool = False


@dataclass
class Tunnel(WorldObject):
    """Safe zone. Overlapping it shelters the actor from obstacles."""
    opening_width: float = 8.0

    @property
    def openings(self) -> tuple:
        """Entry and exit holes, drawn at both ends."""
        inset = 5.0
        hole_h = self.height - 2 * inset
        return (
            Rect(self.x + inset - self.opening_width, self.y + inset, self.opening_width * 2, hole_h),
            Rect(self.right - inset - self.opening_width, self.y + inset, self.opening_width * 2, hole_h),
        )


@dataclass
class Cloud(WorldObject):
    """Background decoration, never collides."""
    drift: float = 0.3


@dataclass
class SpawnBatch:
    """Objects created by one spawn decision."""
    obstacle: Optional[Obstacle] = None
    tunnel: Optional[Tunnel] = None
    collectible: Optional[Collectible] = None

    def __iter__(self):
        for obj in (self.tunnel, self.obstacle, self.collectible):
            if obj is not None:
                yield obj


def advance_objects(collection: List[WorldObject], speed: float) -> int:
    """Scroll every member left by ``speed`` and prune those fully off-field.

    Survivors keep their relative order. Returns how many were removed.
    """
    for obj in collection:
        obj.x -= speed

    before = len(collection)
    collection[:] = [obj for obj in collection if obj.right >= 0]
    return before - len(collection)


def create_clouds(rng: random.Random, field_width: float, count: int = CLOUD_COUNT) -> List[Cloud]:
    clouds = []
    for _ in range(count):
        clouds.append(Cloud(
            x=rng.random() * field_width,
            y=30 + rng.random() * 80,
            width=60 + rng.random() * 40,
            height=40.0,
            drift=0.2 + rng.random() * 0.3,
        ))
    return clouds


def drift_clouds(clouds: Sequence[Cloud], field_width: float, rng: random.Random) -> None:
    for cloud in clouds:
        cloud.x -= cloud.drift
        if cloud.right < 0:
            cloud.x = field_width + rng.random() * 100
            cloud.y = 30 + rng.random() * 80


@dataclass
class World:
    """Ordered collections of everything on the field."""

    obstacles: List[Obstacle] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)
    tunnels: List[Tunnel] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)

    def advance(self, speed: float, field_width: float, rng: random.Random) -> None:
        removed = 0
        removed += advance_objects(self.obstacles, speed)
        removed += advance_objects(self.collectibles, speed)
        removed += advance_objects(self.tunnels, speed)
        if removed:
            logger.debug(f"Pruned {removed} objects")

        drift_clouds(self.clouds, field_width, rng)

    def add(self, batch: SpawnBatch) -> None:
        for obj in batch:
            if isinstance(obj, Tunnel):
                self.tunnels.append(obj)
            elif isinstance(obj, Obstacle):
                self.obstacles.append(obj)
            elif isinstance(obj, Collectible):
                self.collectibles.append(obj)
            else:
                raise TypeError(f"Cannot register {type(obj).__name__}")

    def clear(self) -> None:
        """Drop all gameplay objects. Clouds are scenery and stay."""
        self.obstacles.clear()
        self.collectibles.clear()
        self.tunnels.clear()

    def __len__(self) -> int:
        return len(self.obstacles) + len(self.collectibles) + len(self.tunnels)
