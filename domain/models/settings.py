"""
Wheel settings: one immutable configuration structure validated as a whole.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any

import config
from domain import error_codes
from domain.errors import InvalidConfigurationError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class WheelSettings:
    """
    Behaviour settings for a wheel.

    Defaults come from ``config`` so deployments can tune them through the
    environment. Instances are never mutated; use ``replace`` to derive an
    updated copy (which is validated before it is returned).

    rotation_speed_max must be finite and non-negative. rotation_resistance
    must be finite; a negative value speeds the wheel up instead of slowing it.
    """

    pointer_angle: float = field(default_factory=lambda: config.WHEEL_POINTER_ANGLE)
    rotation_resistance: float = field(default_factory=lambda: config.WHEEL_ROTATION_RESISTANCE)
    rotation_speed_max: float = field(default_factory=lambda: config.WHEEL_ROTATION_SPEED_MAX)
    drag_capture_ms: float = field(default_factory=lambda: config.WHEEL_DRAG_CAPTURE_MS)
    is_interactive: bool = field(default_factory=lambda: config.WHEEL_IS_INTERACTIVE)
    debug: bool = field(default_factory=lambda: config.WHEEL_DEBUG)
    radius: float = field(default_factory=lambda: config.WHEEL_RADIUS)
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationError describing the first invalid field."""
        for name in ("pointer_angle", "rotation_resistance", "rotation_speed_max", "offset_x", "offset_y"):
            val = getattr(self, name)
            if not _is_number(val) or math.isnan(val):
                raise InvalidConfigurationError(f"{name} must be a number, got {val!r}")

        if not 0 <= self.pointer_angle < 360:
            raise InvalidConfigurationError(
                f"pointer_angle must be between 0 (inclusive) and 360 (exclusive), got {self.pointer_angle}"
            )
        for name in ("rotation_resistance", "rotation_speed_max"):
            val = getattr(self, name)
            if not math.isfinite(val):
                raise InvalidConfigurationError(f"{name} must be finite, got {val!r}")
        if self.rotation_speed_max < 0:
            raise InvalidConfigurationError(f"rotation_speed_max must be >= 0, got {self.rotation_speed_max}")
        if not _is_number(self.drag_capture_ms) or not math.isfinite(self.drag_capture_ms) or self.drag_capture_ms <= 0:
            raise InvalidConfigurationError(f"drag_capture_ms must be a positive number, got {self.drag_capture_ms!r}")
        if not _is_number(self.radius) or not 0 < self.radius <= 1:
            raise InvalidConfigurationError(f"radius must be a number between 0 and 1, got {self.radius!r}")
        for name in ("is_interactive", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigurationError(f"{name} must be a boolean")

    def replace(self, **changes: Any) -> "WheelSettings":
        """
        Return a validated copy with ``changes`` applied.

        A value of ``None`` restores that field's documented default.
        """
        known = {f.name: f for f in dataclasses.fields(self)}
        unknown = set(changes) - set(known)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown wheel setting(s): {', '.join(sorted(unknown))}", code=error_codes.VALIDATION_ERROR
            )

        resolved = {}
        for name, value in changes.items():
            if value is None:
                f = known[name]
                value = f.default_factory() if f.default_factory is not dataclasses.MISSING else f.default
            resolved[name] = value
        return dataclasses.replace(self, **resolved)
