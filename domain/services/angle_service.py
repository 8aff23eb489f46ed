"""
Angle geometry for the wheel.

Pure functions: mapping item weights to angular ranges, resolving which item
sits under the pointer, and the small angle helpers those depend on.

Conventions: degrees, 0 is north, angles grow clockwise.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from domain import error_codes
from domain.errors import DegenerateGeometryError, InvalidConfigurationError
from domain.models.geometry import AngleRange

# Narrowest range an item may cover, in degrees
MIN_ITEM_ANGLE = 1e-9


def normalize_angle(angle: float) -> float:
    """Reduce an angle into [0, 360)."""
    reduced = angle % 360
    # A tiny negative angle can round up to exactly 360.0
    return 0.0 if reduced >= 360 else reduced


def is_angle_between(angle: float, start: float, end: float) -> bool:
    """
    Half-open, wrap-aware membership test on normalized angles.

    ``start == end`` is an empty arc.
    """
    if start < end:
        return start <= angle < end
    if start > end:
        return angle >= start or angle < end
    return False


def diff_angle(from_angle: float, to_angle: float) -> float:
    """Shortest signed difference from ``from_angle`` to ``to_angle``, in (-180, 180]."""
    diff = (to_angle - from_angle) % 360
    if diff > 180:
        diff -= 360
    return diff


def angle_from_center(center_x: float, center_y: float, x: float, y: float) -> float:
    """
    Angle of (x, y) around the center, 0 at north and clockwise positive.

    Screen coordinates: y grows downward.
    """
    angle = math.degrees(math.atan2(y - center_y, x - center_x))
    return normalize_angle(angle + 90)


def compute_item_angles(weights: Sequence[float], rotation_offset: float = 0.0) -> list[AngleRange]:
    """
    Tile 360 degrees with one range per weight, starting at ``rotation_offset``.

    The last range always ends exactly 360 degrees after the first one starts,
    absorbing accumulated floating-point error.

    Raises:
        InvalidConfigurationError: if ``weights`` is empty
        DegenerateGeometryError: if the weights sum to zero, a negative or a
            non-finite value, or if an item is too thin for its range to keep
            a positive width
    """
    if not weights:
        raise InvalidConfigurationError("Cannot compute item angles without items", code=error_codes.NO_ITEMS)

    try:
        weight_sum = math.fsum(weights)
    except OverflowError as exc:
        raise DegenerateGeometryError("Item weights overflow when summed") from exc
    if not math.isfinite(weight_sum) or weight_sum <= 0:
        raise DegenerateGeometryError(f"Item weights must sum to a positive number, got {weight_sum}")

    unit_angle = 360 / weight_sum
    angles = []
    last_angle = rotation_offset
    for weight in weights:
        item_angle = weight * unit_angle
        if not item_angle >= MIN_ITEM_ANGLE:
            raise DegenerateGeometryError(
                f"Item weight {weight} is too small relative to the total weight {weight_sum}"
            )
        angles.append(AngleRange(start=last_angle, end=last_angle + item_angle))
        last_angle += item_angle

    if len(angles) > 1:
        angles[-1] = AngleRange(start=angles[-1].start, end=angles[0].start + 360)

    if any(a.end <= a.start for a in angles):
        raise DegenerateGeometryError(f"Item ranges collapse at rotation {rotation_offset}")
    return angles


def _normalized_bounds(angles: Sequence[AngleRange]) -> list[tuple[float, float]]:
    # Boundaries are taken from consecutive starts so the reduced ranges share
    # edges exactly; the last range closes on the first start.
    starts = [normalize_angle(a.start) for a in angles]
    return [(starts[i], starts[(i + 1) % len(starts)]) for i in range(len(starts))]


def find_item_index(angles: Sequence[AngleRange], pointer_angle: float) -> int | None:
    """Index of the range containing ``pointer_angle``, or None when there are no ranges."""
    if not angles:
        return None
    if len(angles) == 1:
        return 0

    pointer = normalize_angle(pointer_angle)
    for i, (start, end) in enumerate(_normalized_bounds(angles)):
        if is_angle_between(pointer, start, end):
            return i
    return None


def resolve_current_index(
    angles: Sequence[AngleRange],
    pointer_angle: float,
    previous_index: int | None,
) -> tuple[int | None, bool]:
    """
    Resolve the item under the pointer.

    Returns:
        (new_index, changed). ``changed`` is False when the resolved index
        equals ``previous_index``.
    """
    new_index = find_item_index(angles, pointer_angle)
    return new_index, new_index != previous_index


def item_center_angle(angles: Sequence[AngleRange], index: int) -> float:
    return angles[index].center


def item_random_angle(angles: Sequence[AngleRange], index: int, rng: random.Random | None = None) -> float:
    """A uniformly random angle inside item ``index`` (start inclusive, end exclusive)."""
    rng = rng or random
    angle_range = angles[index]
    angle = rng.uniform(angle_range.start, angle_range.end)
    return angle if angle < angle_range.end else angle_range.start


def calc_wheel_rotation_for_target_angle(
    current_rotation: float, target_angle: float, direction: int = 1
) -> float:
    """
    Rotation that brings ``target_angle`` (item-relative) to the pointer.

    The result is reached from ``current_rotation`` by travelling in
    ``direction`` (+1 clockwise, -1 anticlockwise) by less than a full turn.
    ``target_angle`` is the item angle minus the pointer angle.
    """
    # Rest rotation r satisfies (r + target_angle) % 360 == 0
    desired = normalize_angle(-target_angle)
    current = normalize_angle(current_rotation)
    if direction == 1:
        travel = normalize_angle(desired - current)
    else:
        travel = -normalize_angle(current - desired)
    return current_rotation + travel
