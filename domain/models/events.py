"""
Lifecycle events emitted by the wheel to its observers.
"""

from dataclasses import dataclass
from typing import ClassVar

# Spin start methods
SPIN_METHOD_SPIN = "spin"
SPIN_METHOD_SPIN_TO = "spinto"
SPIN_METHOD_SPIN_TO_ITEM = "spintoitem"
SPIN_METHOD_INTERACT = "interact"


@dataclass(frozen=True)
class SpinStartEvent:
    """
    The wheel started moving.

    Free spins (``spin`` and drag release) fill ``rotation_speed`` and
    ``rotation_resistance``. Timed animations fill ``target_rotation`` and
    ``duration``, plus ``target_item_index`` for ``spin_to_item``.
    """

    type: ClassVar[str] = "spin"

    method: str
    rotation_speed: float | None = None
    rotation_resistance: float | None = None
    target_rotation: float | None = None
    target_item_index: int | None = None
    duration: float | None = None


@dataclass(frozen=True)
class RestEvent:
    """The wheel came to rest on its own."""

    type: ClassVar[str] = "rest"

    current_index: int | None
    rotation: float


@dataclass(frozen=True)
class CurrentIndexChangeEvent:
    """A different item is now under the pointer."""

    type: ClassVar[str] = "currentIndexChange"

    current_index: int | None
