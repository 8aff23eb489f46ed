"""
Wheel item domain model.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from domain import error_codes
from domain.errors import InvalidConfigurationError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Item:
    """
    One weighted sector of the wheel.

    Only ``weight`` takes part in the angle tiling. The remaining fields are
    carried for the renderer and the host (``value`` is an arbitrary payload).
    """

    label: str = ""
    weight: float = 1.0
    value: Any = None
    background_color: str | None = None
    label_color: str | None = None
    image: str | None = None
    image_opacity: float = 1.0
    image_radius: float = 0.5
    image_rotation: float = 0.0
    image_scale: float = 1.0

    def __post_init__(self):
        if not isinstance(self.label, str):
            raise InvalidConfigurationError("Item.label must be a string", code=error_codes.INVALID_ITEM)
        if not _is_number(self.weight) or not math.isfinite(self.weight) or self.weight <= 0:
            raise InvalidConfigurationError(
                f"Item.weight must be a positive number, got {self.weight!r}",
                code=error_codes.INVALID_ITEM,
            )
        for name in ("background_color", "label_color", "image"):
            val = getattr(self, name)
            if val is not None and not isinstance(val, str):
                raise InvalidConfigurationError(f"Item.{name} must be a string", code=error_codes.INVALID_ITEM)
        if not _is_number(self.image_opacity) or not 0 <= self.image_opacity <= 1:
            raise InvalidConfigurationError(
                "Item.image_opacity must be a number between 0 and 1", code=error_codes.INVALID_ITEM
            )
        if not _is_number(self.image_radius) or not 0 <= self.image_radius <= 1:
            raise InvalidConfigurationError(
                "Item.image_radius must be a number between 0 and 1", code=error_codes.INVALID_ITEM
            )
        if not _is_number(self.image_rotation) or not math.isfinite(self.image_rotation):
            raise InvalidConfigurationError("Item.image_rotation must be a finite number", code=error_codes.INVALID_ITEM)
        if not _is_number(self.image_scale) or not math.isfinite(self.image_scale) or self.image_scale <= 0:
            raise InvalidConfigurationError(
                "Item.image_scale must be a positive finite number", code=error_codes.INVALID_ITEM
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        """Build an item from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown item field(s): {', '.join(sorted(unknown))}", code=error_codes.INVALID_ITEM
            )
        return cls(**dict(data))


def build_items(raw_items: Any) -> tuple[Item, ...]:
    """
    Normalize a caller-supplied item list.

    Accepts ``Item`` instances or mappings. ``None`` yields an empty wheel.
    """
    if raw_items is None:
        return ()
    if isinstance(raw_items, (str, bytes, Mapping)) or not hasattr(raw_items, "__iter__"):
        raise InvalidConfigurationError("items must be a sequence", code=error_codes.INVALID_ITEM)

    items = []
    for raw in raw_items:
        if isinstance(raw, Item):
            items.append(raw)
        elif isinstance(raw, Mapping):
            items.append(Item.from_dict(raw))
        else:
            raise InvalidConfigurationError(
                f"Each item must be an Item or a mapping, got {type(raw).__name__}",
                code=error_codes.INVALID_ITEM,
            )
    return tuple(items)
