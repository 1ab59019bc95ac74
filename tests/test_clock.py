"""Virtual clock tests."""

import math

from virtualbook.simulation.clock import VirtualClock, align_to_minute

from conftest import MINUTE, T0


def test_one_wall_second_is_one_virtual_minute():
    clock = VirtualClock(now_ms=T0)
    assert clock.advance(1000) == MINUTE
    assert clock.now_ms == T0 + MINUTE


def test_speed_scales_advance():
    clock = VirtualClock(now_ms=T0, speed=5)
    clock.advance(250)
    assert clock.now_ms == T0 + 250 * 5 * 60


def test_paused_clock_does_not_move():
    clock = VirtualClock(now_ms=T0, playing=False)
    assert clock.advance(10_000) == 0
    assert clock.now_ms == T0


def test_negative_delta_ignored():
    clock = VirtualClock(now_ms=T0)
    assert clock.advance(-500) == 0
    assert clock.now_ms == T0


def test_jump_ignores_playing_flag():
    clock = VirtualClock(now_ms=T0, playing=False)
    clock.jump()
    assert clock.now_ms == T0 + 15 * MINUTE
    clock.jump(3)
    assert clock.now_ms == T0 + 18 * MINUTE


def test_set_speed_validation():
    clock = VirtualClock(now_ms=T0)
    assert clock.set_speed(2.5)
    assert clock.speed == 2.5
    for bad in (0, -1, math.nan, math.inf):
        assert not clock.set_speed(bad)
    assert clock.speed == 2.5


def test_align_to_minute():
    assert align_to_minute(T0 + 12_345) == T0


def test_fractional_advance_is_carried():
    clock = VirtualClock(now_ms=T0, speed=0.0625)
    # 1ms * 0.0625 * 60 = 3.75 virtual ms per tick
    steps = [clock.advance(1) for _ in range(4)]
    assert steps == [3, 4, 4, 4]
    assert clock.now_ms == T0 + 15


def test_slow_speed_short_frames_still_move():
    clock = VirtualClock(now_ms=T0, speed=0.001)
    for _ in range(1000):
        clock.advance(16)
    assert 959 <= clock.now_ms - T0 <= 960
