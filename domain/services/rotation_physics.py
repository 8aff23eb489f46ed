"""
Rotation physics state machine.

Owns the wheel's rotation and advances it once per tick according to the
active spin session: Idle, FreeSpin (constant resistance) or TimedAnimation
(eased interpolation between two rotations).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from domain import error_codes
from domain.errors import InvalidConfigurationError
from domain.models.spin_session import EasingFunction, FreeSpin, Idle, SpinSession, TimedAnimation
from utils.easing import ease_sin_out

logger = logging.getLogger("spinwheel.domain.physics")

IDLE = Idle()


@dataclass(frozen=True)
class TickOutcome:
    """What a tick did: whether rotation changed and whether the wheel just came to rest."""

    rotated: bool = False
    came_to_rest: bool = False


def limit_speed(speed: float, max_speed: float) -> float:
    """Clamp ``speed`` to [-max_speed, max_speed]."""
    return max(min(speed, max_speed), -max_speed)


class RotationPhysics:
    """
    Single source of truth for rotation while the wheel is being driven.

    At most one session is active; starting a session replaces the previous
    one unconditionally. Rotation is an unbounded number of degrees.
    """

    def __init__(self, rotation: float = 0.0):
        self.rotation = float(rotation)
        self.session: SpinSession = IDLE

    @property
    def is_active(self) -> bool:
        return not isinstance(self.session, Idle)

    @property
    def rotation_speed(self) -> float:
        """Current free-spin speed in degrees/second (0 when not free-spinning)."""
        if isinstance(self.session, FreeSpin):
            return self.session.speed
        return 0.0

    def stop(self) -> None:
        """Cancel whatever session is active. Emits nothing."""
        self.session = IDLE

    def begin_free_spin(self, speed: float, max_speed: float, resistance: float) -> float:
        """
        Start a free spin at ``speed`` (clamped to max_speed).

        A clamped speed of 0 leaves the wheel idle.

        Returns:
            The speed actually applied.
        """
        self.stop()
        speed = limit_speed(speed, max_speed)
        if speed == 0:
            return 0.0

        direction = 1 if speed >= 0 else -1
        self.session = FreeSpin(speed=speed, direction=direction, resistance=resistance)
        logger.debug(f"Free spin at {speed:.1f} deg/s, resistance {resistance}")
        return speed

    def begin_animation(
        self,
        end_rotation: float,
        duration: float,
        now: float,
        easing: EasingFunction | None = None,
    ) -> TimedAnimation:
        """
        Animate from the current rotation to ``end_rotation`` over ``duration`` ms.

        Raises:
            InvalidConfigurationError: for a non-finite target or a negative/non-finite duration
        """
        if not _is_finite_number(end_rotation):
            raise InvalidConfigurationError(
                f"Target rotation must be a finite number, got {end_rotation!r}",
                code=error_codes.INVALID_SPIN_TARGET,
            )
        if not _is_finite_number(duration) or duration < 0:
            raise InvalidConfigurationError(
                f"Duration must be a non-negative number of milliseconds, got {duration!r}",
                code=error_codes.INVALID_DURATION,
            )
        if easing is not None and not callable(easing):
            raise InvalidConfigurationError("easing must be callable")

        self.stop()
        animation = TimedAnimation(
            start_rotation=self.rotation,
            end_rotation=float(end_rotation),
            start_time=now,
            end_time=now + duration,
            easing=easing or ease_sin_out,
        )
        self.session = animation
        logger.debug(f"Animating {animation.start_rotation:.2f} -> {animation.end_rotation:.2f} over {duration}ms")
        return animation

    def tick(self, now: float) -> TickOutcome:
        """Advance the active session to time ``now`` (monotonic ms)."""
        session = self.session
        if isinstance(session, TimedAnimation):
            return self._tick_animation(session, now)
        if isinstance(session, FreeSpin):
            return self._tick_free_spin(session, now)
        return TickOutcome()

    def _tick_animation(self, animation: TimedAnimation, now: float) -> TickOutcome:
        if now >= animation.end_time:
            # Snap to the exact target rather than the last eased value
            self.rotation = animation.end_rotation
            self.session = IDLE
            return TickOutcome(rotated=True, came_to_rest=True)

        duration = animation.duration
        # A frame can be stamped slightly before the animation's start time
        progress = max(0.0, (now - animation.start_time) / duration) if duration > 0 else 0.0
        distance = animation.end_rotation - animation.start_rotation
        self.rotation = animation.start_rotation + distance * animation.easing(progress)
        return TickOutcome(rotated=True)

    def _tick_free_spin(self, spin: FreeSpin, now: float) -> TickOutcome:
        if spin.last_frame_time is None:
            spin.last_frame_time = now
            return TickOutcome()

        elapsed_ms = now - spin.last_frame_time
        if elapsed_ms <= 0:
            return TickOutcome()

        elapsed = elapsed_ms / 1000
        self.rotation += math.fmod(elapsed * spin.speed, 360)

        new_speed = spin.speed - spin.resistance * elapsed * spin.direction
        # Never overshoot into reverse rotation
        if (spin.direction == 1 and new_speed < 0) or (spin.direction == -1 and new_speed >= 0):
            new_speed = 0.0

        spin.speed = new_speed
        spin.last_frame_time = now

        if new_speed == 0:
            self.session = IDLE
            return TickOutcome(rotated=True, came_to_rest=True)
        return TickOutcome(rotated=True)


def _is_finite_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
