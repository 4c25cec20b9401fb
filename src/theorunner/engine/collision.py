"""Hitbox tests, tunnel shelter and tuna scoring."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from theorunner.engine.physics import Actor
from theorunner.engine.tuning import Tuning
from theorunner.engine.world import Collectible, Obstacle, Rect, Tunnel


@dataclass
class CollisionOutcome:
    sheltered: bool = False
    hit: Optional[Obstacle] = None
    collected: List[Collectible] = field(default_factory=list)

    @property
    def round_ended(self) -> bool:
        return self.hit is not None


def hitbox(actor: Actor, tuning: Tuning) -> Rect:
    """The inset box used for every collision test, smaller than the sprite."""
    left, top, right, bottom = tuning.hitbox_inset
    return Rect(
        actor.x + left,
        actor.y - actor.height + top,
        actor.width - left - right,
        actor.height - top - bottom,
    )


def overlaps(a: Rect, b: Rect) -> bool:
    """Open-interval AABB test; boxes that only touch do not overlap."""
    return (
        a.x < b.right and a.right > b.x
        and a.y < b.bottom and a.bottom > b.y
    )


def resolve(
    box: Rect,
    tunnels: Sequence[Tunnel],
    obstacles: Sequence[Obstacle],
    collectibles: Sequence[Collectible],
) -> CollisionOutcome:
    """Test the hitbox against the world for one tick.

    A tunnel overlap shelters the actor from every obstacle. A hit ends the
    round immediately and nothing is collected on that tick. Otherwise each
    uncollected can under the hitbox is flagged collected.
    """
    outcome = CollisionOutcome()
    outcome.sheltered = any(overlaps(box, t.rect) for t in tunnels)

    if not outcome.sheltered:
        for obstacle in obstacles:
            if overlaps(box, obstacle.rect):
                outcome.hit = obstacle
                return outcome

    for can in collectibles:
        if not can.collected and overlaps(box, can.rect):
            can.collected = True
            outcome.collected.append(can)

    return outcome
