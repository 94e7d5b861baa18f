"""
AnimationScheduler 테스트: 경로 범위, 주기성, 대기 상태.
"""

import pytest

from snowfall.geometry import Viewport, get_fall_path
from snowfall.particles import Particle, ParticleConfig, ParticleFactory
from snowfall.scheduler import AnimationScheduler


def make_scheduler(duration=4.0, delay=1.0, height=800):
    p = Particle(x_position=100.0, jitter=3.0, scale=1.0, opacity=1.0,
                 duration=duration, start_delay=delay)
    return AnimationScheduler(p, get_fall_path(Viewport(400, height)))


class TestFallPath:

    def test_path_endpoints(self):
        path = get_fall_path(Viewport(400, 800))
        assert path.start_y == -50
        assert path.end_y == 850
        assert path.length == 900

    def test_custom_margin(self):
        path = get_fall_path(Viewport(400, 600), margin=10)
        assert (path.start_y, path.end_y) == (-10, 610)


class TestPending:

    def test_before_delay_is_start(self):
        s = make_scheduler(delay=2.0)
        for t in (0.0, 0.5, 1.999):
            assert s.position(t) == -50
            assert s.state_at(t) == AnimationScheduler.STATE_PENDING

    def test_falling_after_delay(self):
        s = make_scheduler(delay=2.0)
        assert s.state_at(2.0) == AnimationScheduler.STATE_FALLING
        assert s.state_at(100.0) == AnimationScheduler.STATE_FALLING

    def test_delay_start_is_start(self):
        s = make_scheduler(delay=2.0)
        assert s.position(2.0) == -50


class TestMotion:

    def test_linear_midpoint(self):
        s = make_scheduler(duration=4.0, delay=1.0)
        # 절반 지점 = 경로 중간
        assert s.position(3.0) == pytest.approx(400.0)
        assert s.position(2.0) == pytest.approx(175.0)

    def test_bounds_and_monotonic_within_cycle(self):
        s = make_scheduler(duration=3.0, delay=0.7)
        prev = None
        prev_cycle = None
        t = 0.7
        while t < 0.7 + 3.0 * 4:
            y = s.position(t)
            cycle = s.cycle_at(t)
            assert -50 <= y <= 850
            if prev is not None and cycle == prev_cycle:
                assert y >= prev
            prev, prev_cycle = y, cycle
            t += 0.01

    def test_just_after_delay_is_near_top(self):
        """delay 바로 직후는 위쪽이어야 함 (바닥으로 튀면 안 됨)."""
        s = make_scheduler(duration=3.0, delay=1.0)
        for tiny in (1e-15, 1e-12, 1e-9):
            y = s.position(1.0 + tiny)
            assert y == pytest.approx(-50, abs=1e-3)
            assert y <= s.position(1.5)
            assert s.cycle_at(1.0 + tiny) == 0

    def test_monotonic_near_cycle_edges(self):
        s = make_scheduler(duration=3.0, delay=0.7)
        for k in range(4):
            start = 0.7 + k * 3.0
            samples = [start + 1e-7, start + 1e-6, start + 0.5, start + 2.9]
            ys = [s.position(t) for t in samples]
            cycles = {s.cycle_at(t) for t in samples}

            assert cycles == {k}
            assert all(-50 <= y <= 850 for y in ys)
            assert ys == sorted(ys)
            assert ys[0] == pytest.approx(-50, abs=1e-3)

    def test_cycle_boundary_belongs_to_previous_cycle(self):
        s = make_scheduler(duration=3.0, delay=0.7)
        for k in range(1, 4):
            t = 0.7 + k * 3.0 + 1e-12
            assert s.cycle_at(t) == k - 1
            assert s.position(t) == pytest.approx(850)

    def test_first_cycle_ends_at_bottom(self):
        s = make_scheduler(duration=3.0, delay=0.1)
        assert s.position(0.1 + 3.0) == pytest.approx(850)

    def test_resets_after_cycle(self):
        s = make_scheduler(duration=3.0, delay=0.1)
        assert s.position(0.1 + 3.0 + 0.03) == pytest.approx(-50 + 900 * 0.01)

    def test_periodic(self):
        s = make_scheduler(duration=2.5, delay=0.4)
        for t in (0.5, 1.3, 2.2, 2.8):
            for k in range(1, 5):
                assert s.position(t + k * 2.5) == pytest.approx(s.position(t), abs=1e-6)

    def test_cycle_index(self):
        s = make_scheduler(duration=2.0, delay=1.0)
        assert s.cycle_at(0.5) == 0
        assert s.cycle_at(2.0) == 0
        assert s.cycle_at(3.0) == 0      # 첫 사이클 끝나는 순간
        assert s.cycle_at(3.5) == 1
        assert s.cycle_at(8.0) == 3

    def test_jitter_range(self, rng):
        s = make_scheduler()
        for _ in range(200):
            assert 97.0 <= s.x_at(rng) <= 103.0

    def test_no_jitter(self, rng):
        p = Particle(x_position=10.0, jitter=0.0, scale=1.0, opacity=1.0,
                     duration=1.0, start_delay=0.0)
        s = AnimationScheduler(p, get_fall_path(Viewport(100, 100)))
        assert s.x_at(rng) == 10.0


class TestFiftyFlakes:

    def test_start_and_first_cycle_end(self, rng):
        """400x800 에서 50개: t=0 에서 -50, delay+duration 에서 850."""
        vp = Viewport(400, 800)
        path = get_fall_path(vp, 50)
        particles = ParticleFactory(rng).create_many(vp, ParticleConfig(count=50))

        for p in particles:
            s = AnimationScheduler(p, path)
            assert s.position(0) == -50
            assert s.position(p.start_delay + p.duration) == pytest.approx(850)
