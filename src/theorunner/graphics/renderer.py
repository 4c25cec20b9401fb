"""Draws a render snapshot into an RGB buffer.

The renderer only reads RenderSnapshot copies; it never touches the session.
Text (score, overlays) is left to the window, which has real fonts.
"""

import math
import random
from typing import Tuple

from theorunner.core.state import State
from theorunner.engine.session import RenderSnapshot
from theorunner.engine.tuning import Tuning
from theorunner.engine.world import Cloud, Collectible, Obstacle, ObstacleKind, Tunnel
from theorunner.graphics.primitives import (
    Buffer,
    darken,
    draw_circle,
    draw_ellipse,
    draw_line,
    draw_rect,
    draw_triangle,
    fill,
    vertical_gradient,
)

SKY = (135, 206, 235)
SKY_LOW = (224, 246, 255)
GROUND = (144, 238, 144)
GROUND_DARK = (123, 199, 123)
THEO = (255, 255, 255)
OUTLINE = (51, 51, 51)
NOSE = (255, 182, 193)
ORANGE = (255, 165, 0)
ORANGE_DARK = (229, 148, 0)
LEAF = (34, 139, 34)
BAG = (221, 221, 221)
BAG_OUTLINE = (153, 153, 153)
TUNNEL = (139, 69, 19)
TUNNEL_INNER = (93, 46, 12)
TUNA = (192, 192, 192)
TUNA_LABEL = (65, 105, 225)
TUNA_SHINE = (235, 235, 235)
CLOUD = (250, 250, 252)

GROUND_OFFSET = 10  # ground strip starts this far below the feet line
OVERLAY_DIM = 0.5


def shake_offset(snapshot: RenderSnapshot, rng: random.Random) -> Tuple[int, int]:
    """Random camera jitter while the shake countdown runs."""
    if snapshot.reduced_motion or snapshot.shake <= 0:
        return (0, 0)
    return (
        int((rng.random() - 0.5) * snapshot.shake),
        int((rng.random() - 0.5) * snapshot.shake),
    )


def _draw_cloud(buffer: Buffer, cloud: Cloud) -> None:
    x, y, w = cloud.x, cloud.y, cloud.width
    draw_ellipse(buffer, x, y, w * 0.5, 20, CLOUD)
    draw_ellipse(buffer, x - w * 0.3, y + 5, w * 0.3, 15, CLOUD)
    draw_ellipse(buffer, x + w * 0.3, y + 5, w * 0.35, 18, CLOUD)


def _draw_tunnel(buffer: Buffer, tunnel: Tunnel) -> None:
    draw_rect(buffer, int(tunnel.x), int(tunnel.y), int(tunnel.width), int(tunnel.height), TUNNEL)
    for hole in tunnel.openings:
        draw_ellipse(
            buffer,
            hole.x + hole.width / 2,
            hole.y + hole.height / 2,
            hole.width / 2,
            hole.height / 2,
            TUNNEL_INNER,
        )


def _draw_obstacle(buffer: Buffer, obs: Obstacle) -> None:
    if obs.kind is ObstacleKind.ORANGE:
        cx, cy, r = obs.x + obs.width / 2, obs.y + obs.height / 2, obs.width / 2
        draw_circle(buffer, cx, cy, r + 1, ORANGE_DARK)
        draw_circle(buffer, cx, cy, r - 1, ORANGE)
        draw_ellipse(buffer, cx, obs.y - 2, 5, 3, LEAF)
    else:
        x, y, w, h = int(obs.x), int(obs.y), int(obs.width), int(obs.height)
        top = y + int(h * 0.3)
        draw_rect(buffer, x + 5, top, w - 10, y + h - top, BAG)
        draw_triangle(buffer, (x, top), (x + 5, y + h), (x + 5, top), BAG)
        draw_triangle(buffer, (x + w, top), (x + w - 5, y + h), (x + w - 5, top), BAG)
        draw_ellipse(buffer, x + w / 2, top, w / 2, h * 0.3, BAG)
        draw_rect(buffer, x + 5, y + h - 2, w - 10, 2, BAG_OUTLINE)


def _draw_tuna(buffer: Buffer, can: Collectible) -> None:
    x, y, w, h = int(can.x), int(can.y), int(can.width), int(can.height)
    draw_rect(buffer, x, y, w, h, TUNA)
    draw_rect(buffer, x, y, w, h, BAG_OUTLINE, filled=False)
    draw_rect(buffer, x + 4, y + h // 2 - 2, w - 8, 5, TUNA_LABEL)
    draw_rect(buffer, x + 2, y + 2, 8, 4, TUNA_SHINE)


def _draw_theo(buffer: Buffer, snapshot: RenderSnapshot, tail_phase: float) -> None:
    actor = snapshot.actor
    x, y = int(actor.x), int(actor.y)
    if actor.airborne:
        leg = 0
    else:
        leg = 3 if actor.frame == 0 else -3

    # Tail
    tail_tip_y = y - 45 + int(math.sin(tail_phase) * 5)
    draw_line(buffer, x, y - 20, x - 12, y - 32, OUTLINE, thickness=4)
    draw_line(buffer, x - 12, y - 32, x - 10, tail_tip_y, OUTLINE, thickness=4)

    # Legs
    for hip, offset in ((35, leg), (42, -leg), (10, -leg), (18, leg)):
        draw_line(buffer, x + hip, y - 5, x + hip + 3 + offset, y + 8, OUTLINE, thickness=4)

    # Body and head, outlined by drawing a slightly larger dark shape first
    draw_ellipse(buffer, x + 25, y - 20, 27, 20, OUTLINE)
    draw_ellipse(buffer, x + 25, y - 20, 25, 18, THEO)
    draw_ellipse(buffer, x + 45, y - 30, 17, 15, OUTLINE)
    draw_ellipse(buffer, x + 45, y - 30, 15, 13, THEO)

    # Ears
    draw_triangle(buffer, (x + 38, y - 40), (x + 42, y - 52), (x + 48, y - 42), THEO)
    draw_triangle(buffer, (x + 48, y - 42), (x + 54, y - 52), (x + 58, y - 38), THEO)

    # Eye and nose
    draw_ellipse(buffer, x + 52, y - 32, 3, 4, OUTLINE)
    draw_ellipse(buffer, x + 58, y - 28, 2, 2, NOSE)


def render_frame(
    buffer: Buffer,
    snapshot: RenderSnapshot,
    tuning: Tuning,
    tail_phase: float = 0.0,
) -> None:
    """Draw one full frame: sky, scenery, world objects, Theo, dimming overlay."""
    height, width = buffer.shape[:2]
    ground_y = int(tuning.ground_y)

    fill(buffer, SKY_LOW)
    vertical_gradient(buffer, SKY, SKY_LOW, ground_y)

    for cloud in snapshot.clouds:
        _draw_cloud(buffer, cloud)

    draw_rect(buffer, 0, ground_y + GROUND_OFFSET, width, height - ground_y, GROUND)
    draw_rect(buffer, 0, ground_y + GROUND_OFFSET, width, 5, GROUND_DARK)

    for tunnel in snapshot.tunnels:
        _draw_tunnel(buffer, tunnel)
    for obs in snapshot.obstacles:
        _draw_obstacle(buffer, obs)
    for can in snapshot.collectibles:
        if not can.collected:
            _draw_tuna(buffer, can)

    _draw_theo(buffer, snapshot, tail_phase)

    if snapshot.mode != State.RUNNING:
        darken(buffer, OVERLAY_DIM)
