"""
Geometry value types shared by the angle calculator, the drag buffer and the renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A position in the host's wheel-space coordinates (pixels, y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class AngleRange:
    """
    Angular extent of one item, in degrees.

    ``start`` is inclusive and ``end`` exclusive. Values are not reduced modulo
    360, so a range may sit anywhere on the real line; compare against the
    pointer with modulo arithmetic only.
    """

    start: float
    end: float

    @property
    def span(self) -> float:
        return self.end - self.start

    @property
    def center(self) -> float:
        return self.start + self.span / 2


@dataclass(frozen=True)
class WheelGeometry:
    """Center and actual radius (pixels) of the wheel inside the host viewport."""

    center_x: float = 0.0
    center_y: float = 0.0
    radius: float = 0.0

    @classmethod
    def for_viewport(
        cls,
        width: float,
        height: float,
        radius_fraction: float,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> "WheelGeometry":
        """
        Fit the wheel into a ``width`` x ``height`` viewport.

        The wheel's diameter is ``radius_fraction`` of the smallest side. Offsets
        shift the center by a fraction of that side.
        """
        size = min(width, height)
        return cls(
            center_x=width / 2 + offset_x * size,
            center_y=height / 2 + offset_y * size,
            radius=size / 2 * radius_fraction,
        )

    def contains(self, point: Point) -> bool:
        return math.hypot(point.x - self.center_x, point.y - self.center_y) <= self.radius
