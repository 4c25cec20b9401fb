"""Basic drawing primitives on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def vertical_gradient(buffer: Buffer, top: Color, bottom: Color, height: int) -> None:
    """Blend from ``top`` to ``bottom`` over the first ``height`` rows."""
    rows = min(height, buffer.shape[0])
    if rows <= 0:
        return
    t = np.linspace(0.0, 1.0, rows)[:, None]
    colors = (1 - t) * np.array(top, dtype=float) + t * np.array(bottom, dtype=float)
    buffer[:rows, :] = colors[:, None, :].astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        for t in range(thickness):
            if y1 + t < y2:
                buffer[y1 + t, x1:x2] = color
            if y2 - 1 - t >= y1:
                buffer[y2 - 1 - t, x1:x2] = color
            if x1 + t < x2:
                buffer[y1:y2, x1 + t] = color
            if x2 - 1 - t >= x1:
                buffer[y1:y2, x2 - 1 - t] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
) -> None:
    """Fill an axis-aligned ellipse (distance-based mask)."""
    if rx <= 0 or ry <= 0:
        return
    h, w = buffer.shape[:2]

    # Only evaluate the bounding box
    x1 = max(0, int(cx - rx))
    x2 = min(w, int(cx + rx) + 1)
    y1 = max(0, int(cy - ry))
    y2 = min(h, int(cy + ry) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = ((x_indices - cx) / rx) ** 2 + ((y_indices - cy) / ry) ** 2 <= 1.0
    buffer[y1:y2, x1:x2][mask] = color


def draw_circle(buffer: Buffer, cx: float, cy: float, radius: float, color: Color) -> None:
    """Fill a circle."""
    draw_ellipse(buffer, cx, cy, radius, radius, color)


def draw_triangle(buffer: Buffer, a: Point, b: Point, c: Point, color: Color) -> None:
    """Fill a triangle using edge functions over its bounding box."""
    h, w = buffer.shape[:2]
    xs = (a[0], b[0], c[0])
    ys = (a[1], b[1], c[1])
    x1, x2 = max(0, int(min(xs))), min(w, int(max(xs)) + 1)
    y1, y2 = max(0, int(min(ys))), min(h, int(max(ys)) + 1)
    if x1 >= x2 or y1 >= y2:
        return

    py, px = np.mgrid[y1:y2, x1:x2]

    def edge(p, q):
        return (q[0] - p[0]) * (py - p[1]) - (q[1] - p[1]) * (px - p[0])

    e1, e2, e3 = edge(a, b), edge(b, c), edge(c, a)
    mask = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
    buffer[y1:y2, x1:x2][mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        for tx in range(-thickness // 2, (thickness + 1) // 2):
            for ty in range(-thickness // 2, (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def darken(buffer: Buffer, factor: float) -> None:
    """Scale every pixel toward black, used for overlays."""
    buffer[:] = (buffer.astype(np.float32) * factor).astype(np.uint8)
