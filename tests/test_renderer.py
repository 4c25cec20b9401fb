import random

import numpy as np
import pytest

from theorunner.engine.session import get_render_snapshot
from theorunner.engine.tuning import CLASSIC
from theorunner.engine.world import Collectible, Obstacle
from theorunner.graphics import primitives
from theorunner.graphics.renderer import GROUND, ORANGE, SKY, THEO, render_frame, shake_offset


@pytest.fixture
def buffer():
    return primitives.new_buffer(800, 400)


def pixel(buffer, x, y):
    return tuple(int(c) for c in buffer[y, x])


def test_running_frame_draws_sky_ground_and_theo(buffer, running_session) -> None:
    render_frame(buffer, get_render_snapshot(running_session), CLASSIC)

    assert buffer.shape == (400, 800, 3)
    assert pixel(buffer, 0, 0) == SKY
    assert pixel(buffer, 5, 390) == GROUND
    assert pixel(buffer, 105, 300) == THEO


def test_orange_is_drawn_where_it_is(buffer, running_session) -> None:
    running_session.world.obstacles.append(Obstacle(400, 295, 30, 30))
    render_frame(buffer, get_render_snapshot(running_session), CLASSIC)
    assert pixel(buffer, 415, 310) == ORANGE


def test_collected_cans_are_not_drawn(buffer, running_session) -> None:
    render_frame(buffer, get_render_snapshot(running_session), CLASSIC)
    empty = buffer.copy()

    running_session.world.collectibles.append(Collectible(600, 240, 30, 20, collected=True))
    render_frame(buffer, get_render_snapshot(running_session), CLASSIC)

    assert np.array_equal(buffer, empty)


def test_title_screen_is_dimmed(buffer, session) -> None:
    render_frame(buffer, get_render_snapshot(session), CLASSIC)
    assert pixel(buffer, 105, 300) == (127, 127, 127)


def test_shake_offset(running_session) -> None:
    rng = random.Random(7)
    snapshot = get_render_snapshot(running_session)
    assert shake_offset(snapshot, rng) == (0, 0)

    running_session.shake = 15
    snapshot = get_render_snapshot(running_session)
    for _ in range(50):
        dx, dy = shake_offset(snapshot, rng)
        assert abs(dx) <= 7 and abs(dy) <= 7

    running_session.reduced_motion = True
    assert shake_offset(get_render_snapshot(running_session), rng) == (0, 0)


def test_draw_rect_clips_to_buffer() -> None:
    buf = primitives.new_buffer(10, 10)
    primitives.draw_rect(buf, -5, -5, 8, 8, (255, 0, 0))
    primitives.draw_rect(buf, 50, 50, 8, 8, (0, 255, 0))

    assert pixel(buf, 2, 2) == (255, 0, 0)
    assert pixel(buf, 3, 3) == (0, 0, 0)
    assert not buf[:, :, 1].any()


def test_draw_line_covers_endpoints() -> None:
    buf = primitives.new_buffer(20, 20)
    primitives.draw_line(buf, 2, 3, 15, 11, (9, 9, 9))
    assert pixel(buf, 2, 3) == (9, 9, 9)
    assert pixel(buf, 15, 11) == (9, 9, 9)


def test_draw_triangle_fills_inside_only() -> None:
    buf = primitives.new_buffer(20, 20)
    primitives.draw_triangle(buf, (0, 0), (19, 0), (0, 19), (1, 2, 3))
    assert pixel(buf, 2, 2) == (1, 2, 3)
    assert pixel(buf, 18, 18) == (0, 0, 0)
