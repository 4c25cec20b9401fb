"""Graphics for Theo Runner: numpy buffer primitives and the frame renderer."""

from theorunner.graphics.primitives import (
    draw_circle,
    draw_ellipse,
    draw_line,
    draw_rect,
    draw_triangle,
    fill,
    new_buffer,
)
from theorunner.graphics.renderer import render_frame, shake_offset

__all__ = [
    "render_frame",
    "shake_offset",
    "draw_circle",
    "draw_ellipse",
    "draw_line",
    "draw_rect",
    "draw_triangle",
    "fill",
    "new_buffer",
]
