"""Simulation core: physics, spawning, collisions and the session API."""

from .session import (
    RenderSnapshot,
    Session,
    TickEvents,
    get_render_snapshot,
    init_session,
    on_jump_input,
    on_restart_input,
    tick,
)
from .tuning import CLASSIC, NIGHT, PRESETS, SpawnCategory, Tuning, get_tuning

__all__ = [
    "RenderSnapshot",
    "Session",
    "TickEvents",
    "get_render_snapshot",
    "init_session",
    "on_jump_input",
    "on_restart_input",
    "tick",
    "CLASSIC",
    "NIGHT",
    "PRESETS",
    "SpawnCategory",
    "Tuning",
    "get_tuning",
]
