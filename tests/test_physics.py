import pytest

from theorunner.engine import physics
from theorunner.engine.tuning import CLASSIC


@pytest.fixture
def actor():
    return physics.create_actor(CLASSIC)


def test_actor_starts_on_the_ground(actor) -> None:
    assert (actor.x, actor.y) == (80.0, 320.0)
    assert actor.vy == 0.0
    assert not actor.airborne


def test_grounded_actor_stays_clamped(actor) -> None:
    physics.advance(actor, 0.6, 320.0)
    assert actor.y == 320.0
    assert actor.vy == 0.0
    assert not actor.airborne


def test_jump_sets_upward_impulse(actor) -> None:
    assert physics.request_jump(actor, -12.0) is True
    assert actor.vy == -12.0
    assert actor.airborne

    physics.advance(actor, 0.6, 320.0)
    assert actor.vy == pytest.approx(-11.4)
    assert actor.y == pytest.approx(308.6)


def test_jump_while_airborne_is_ignored(actor) -> None:
    physics.request_jump(actor, -12.0)
    physics.advance(actor, 0.6, 320.0)
    vy = actor.vy

    assert physics.request_jump(actor, -12.0) is False
    assert actor.vy == vy


def test_full_jump_never_goes_below_ground_and_lands(actor) -> None:
    physics.request_jump(actor, -12.0)
    peak = actor.y
    for _ in range(200):
        physics.advance(actor, 0.6, 320.0)
        assert actor.y <= 320.0
        peak = min(peak, actor.y)

    assert not actor.airborne
    assert actor.y == 320.0
    assert actor.vy == 0.0
    assert peak < 320.0 - 100


def test_landing_allows_jumping_again(actor) -> None:
    physics.request_jump(actor, -12.0)
    while actor.airborne:
        physics.advance(actor, 0.6, 320.0)
    assert physics.request_jump(actor, -12.0) is True


def test_leg_animation_flips_after_frame_step(actor) -> None:
    physics.animate(actor, 5.0, 10.0)
    physics.animate(actor, 5.0, 10.0)
    assert actor.frame == 0  # exactly 10 is not past the step

    physics.animate(actor, 5.0, 10.0)
    assert actor.frame == 1
    assert actor.frame_time == 0.0
