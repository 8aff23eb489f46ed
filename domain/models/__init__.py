"""
Domain models - pure data structures describing a wheel and how it is driven.
"""

from domain.models.events import CurrentIndexChangeEvent, RestEvent, SpinStartEvent
from domain.models.geometry import AngleRange, Point, WheelGeometry
from domain.models.item import Item, build_items
from domain.models.settings import WheelSettings
from domain.models.spin_session import (
    DragSample,
    DragSession,
    FreeSpin,
    Idle,
    SpinSession,
    TimedAnimation,
)

__all__ = [
    "AngleRange",
    "CurrentIndexChangeEvent",
    "DragSample",
    "DragSession",
    "FreeSpin",
    "Idle",
    "Item",
    "Point",
    "RestEvent",
    "SpinSession",
    "SpinStartEvent",
    "TimedAnimation",
    "WheelGeometry",
    "WheelSettings",
    "build_items",
]
