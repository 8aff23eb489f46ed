"""
Tests for the rotation physics state machine.
"""

import math

import pytest

from domain import error_codes
from domain.errors import InvalidConfigurationError
from domain.models.spin_session import FreeSpin, Idle, TimedAnimation
from domain.services.rotation_physics import RotationPhysics, limit_speed
from utils.easing import linear


def _run_free_spin(physics, start=0.0, frame_ms=10, max_frames=100_000):
    """Tick until idle; returns (frames, rest_count)."""
    now = start
    rests = 0
    physics.tick(now)
    frames = 0
    while physics.is_active and frames < max_frames:
        now += frame_ms
        if physics.tick(now).came_to_rest:
            rests += 1
        frames += 1
    return frames, rests


class TestLimitSpeed:
    @pytest.mark.parametrize(
        "speed,max_speed,expected",
        [(100, 250, 100), (300, 250, 250), (-300, 250, -250), (0, 250, 0), (-10, 0, 0)],
    )
    def test_clamps_both_directions(self, speed, max_speed, expected):
        assert limit_speed(speed, max_speed) == expected


class TestFreeSpin:
    """Tests for velocity-driven rotation."""

    def test_begin_free_spin_clamps_speed(self):
        physics = RotationPhysics()
        applied = physics.begin_free_spin(1000, 250, 35)
        assert applied == 250
        assert physics.rotation_speed == 250
        assert isinstance(physics.session, FreeSpin)

    def test_zero_speed_stays_idle(self):
        physics = RotationPhysics()
        assert physics.begin_free_spin(0, 250, 35) == 0
        assert isinstance(physics.session, Idle)
        assert not physics.is_active

    def test_first_tick_only_sets_baseline(self):
        physics = RotationPhysics(rotation=12.0)
        physics.begin_free_spin(100, 250, 35)

        outcome = physics.tick(5000)

        assert not outcome.rotated
        assert physics.rotation == 12.0
        assert physics.session.last_frame_time == 5000

    def test_non_advancing_clock_does_nothing(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 35)
        physics.tick(1000)
        assert not physics.tick(1000).rotated
        assert not physics.tick(990).rotated
        assert physics.rotation == 0.0

    def test_rotation_advances_by_speed_times_elapsed(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 0)
        physics.tick(0)
        physics.tick(500)
        assert physics.rotation == pytest.approx(50)

    def test_speed_decays_to_exactly_zero_and_rests_once(self):
        physics = RotationPhysics()
        physics.begin_free_spin(200, 250, 100)

        frames, rests = _run_free_spin(physics)

        assert rests == 1
        assert frames == 200
        assert physics.rotation_speed == 0
        assert isinstance(physics.session, Idle)

    @pytest.mark.parametrize("speed,resistance", [(200, 100), (250, 35), (90, 20)])
    def test_distance_matches_analytic_solution(self, speed, resistance):
        """Distance before rest approximates s^2 / (2r) at 10ms frames."""
        physics = RotationPhysics()
        physics.begin_free_spin(speed, 1000, resistance)

        _run_free_spin(physics)

        expected = speed**2 / (2 * resistance)
        # One frame of the initial speed is the discretisation error bound
        assert physics.rotation == pytest.approx(expected, abs=speed * 0.01 + 1e-6)

    def test_anticlockwise_spin_decays_towards_zero(self):
        physics = RotationPhysics()
        physics.begin_free_spin(-200, 250, 100)

        _, rests = _run_free_spin(physics)

        assert rests == 1
        assert physics.rotation == pytest.approx(-200, abs=2.5)
        assert physics.rotation_speed == 0

    def test_never_reverses_direction(self):
        physics = RotationPhysics()
        physics.begin_free_spin(5, 250, 100)
        physics.tick(0)
        outcome = physics.tick(1000)  # Resistance alone would take speed to -95
        assert outcome.came_to_rest
        assert physics.rotation_speed == 0

    def test_zero_resistance_spins_until_stopped(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 0)

        frames, rests = _run_free_spin(physics, max_frames=1000)

        assert frames == 1000
        assert rests == 0
        assert physics.is_active
        assert physics.rotation_speed == 100

    def test_large_step_reduces_increment_modulo_360(self):
        physics = RotationPhysics()
        physics.begin_free_spin(250, 250, 0)
        physics.tick(0)
        physics.tick(2000)  # 500 degrees of travel
        assert physics.rotation == pytest.approx(140)

    def test_stop_cancels_free_spin(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 35)
        physics.stop()
        physics.stop()
        assert not physics.is_active
        assert physics.tick(1000).came_to_rest is False


class TestTimedAnimation:
    """Tests for eased interpolation between rotations."""

    def test_rotation_at_start_time_is_start_rotation(self):
        physics = RotationPhysics(rotation=30)
        physics.begin_animation(390, 1000, now=0)

        physics.tick(0)

        assert physics.rotation == 30

    def test_default_easing_is_sine_out(self):
        physics = RotationPhysics()
        physics.begin_animation(360, 1000, now=0)

        physics.tick(500)

        assert physics.rotation == pytest.approx(360 * math.sin(math.pi / 4))

    def test_custom_easing(self):
        physics = RotationPhysics()
        physics.begin_animation(360, 1000, now=0, easing=linear)
        physics.tick(250)
        assert physics.rotation == pytest.approx(90)

    def test_end_rotation_is_exact(self):
        physics = RotationPhysics(rotation=0.1)
        physics.begin_animation(1234.5678, 1000, now=0)

        physics.tick(999)
        outcome = physics.tick(1000)

        assert outcome.came_to_rest
        assert physics.rotation == 1234.5678
        assert not physics.is_active

    def test_late_frame_snaps_to_end(self):
        physics = RotationPhysics()
        physics.begin_animation(90, 100, now=0)
        assert physics.tick(5000).came_to_rest
        assert physics.rotation == 90

    def test_rest_fires_once(self):
        physics = RotationPhysics()
        physics.begin_animation(90, 100, now=0)
        rests = [physics.tick(t).came_to_rest for t in range(0, 300, 20)]
        assert rests.count(True) == 1

    def test_frame_before_start_clamps_progress(self):
        physics = RotationPhysics(rotation=10)
        physics.begin_animation(100, 1000, now=500)
        physics.tick(400)
        assert physics.rotation == 10

    def test_zero_duration_completes_on_first_tick(self):
        physics = RotationPhysics()
        physics.begin_animation(45, 0, now=100)
        outcome = physics.tick(100)
        assert outcome.came_to_rest
        assert physics.rotation == 45

    def test_animation_replaces_free_spin(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 35)
        physics.begin_animation(45, 100, now=0)
        assert isinstance(physics.session, TimedAnimation)
        assert physics.rotation_speed == 0

    @pytest.mark.parametrize("target", [float("nan"), float("inf"), "90", None, True])
    def test_invalid_target_rejected(self, target):
        physics = RotationPhysics()
        with pytest.raises(InvalidConfigurationError) as exc_info:
            physics.begin_animation(target, 100, now=0)
        assert exc_info.value.code == error_codes.INVALID_SPIN_TARGET
        assert not physics.is_active

    @pytest.mark.parametrize("duration", [-1, float("nan"), float("inf")])
    def test_invalid_duration_rejected(self, duration):
        physics = RotationPhysics()
        with pytest.raises(InvalidConfigurationError) as exc_info:
            physics.begin_animation(90, duration, now=0)
        assert exc_info.value.code == error_codes.INVALID_DURATION

    def test_invalid_target_keeps_running_session(self):
        physics = RotationPhysics()
        physics.begin_free_spin(100, 250, 35)
        with pytest.raises(InvalidConfigurationError):
            physics.begin_animation(float("nan"), 100, now=0)
        assert isinstance(physics.session, FreeSpin)

    def test_non_callable_easing_rejected(self):
        physics = RotationPhysics()
        with pytest.raises(InvalidConfigurationError):
            physics.begin_animation(90, 100, now=0, easing="sin_out")
