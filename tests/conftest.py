"""
Pytest fixtures for tests.

Wheels under test are driven by a ManualClock and a ManualTickScheduler so
physics runs on synthetic timestamps, never on wall-clock time.

This module provides centralized constants and fixtures to reduce duplication
across the test suite.
"""

import math

import pytest

from domain.models.geometry import Point
from domain.models.item import Item
from domain.models.settings import WheelSettings
from infrastructure.tick_scheduler import ManualClock, ManualTickScheduler
from services.interfaces import IWheelObserver
from services.wheel_service import WheelService

# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

FRAME_MS = 10
"""Synthetic frame interval used when stepping physics in tests."""

VIEWPORT = 200
"""Square viewport side used by drag tests; the wheel center is (100, 100)."""


class RecordingObserver(IWheelObserver):
    """Observer that keeps every event it receives, in order."""

    def __init__(self):
        self.events = []

    def on_spin_start(self, event):
        self.events.append(event)

    def on_rest(self, event):
        self.events.append(event)

    def on_current_index_change(self, event):
        self.events.append(event)

    def of_type(self, event_type: str) -> list:
        return [e for e in self.events if e.type == event_type]

    @property
    def spins(self) -> list:
        return self.of_type("spin")

    @property
    def rests(self) -> list:
        return self.of_type("rest")

    @property
    def index_changes(self) -> list:
        return self.of_type("currentIndexChange")


def point_at_angle(angle: float, distance: float = 50.0, center: float = VIEWPORT / 2) -> Point:
    """Point ``distance`` px from the center at wheel angle ``angle`` (0 north, clockwise)."""
    rad = math.radians(angle)
    return Point(center + distance * math.sin(rad), center - distance * math.cos(rad))


def run_until_idle(wheel: WheelService, clock: ManualClock, frame_ms: float = FRAME_MS, max_frames: int = 100_000) -> int:
    """Advance ``wheel`` frame by frame until it stops needing ticks. Returns frames advanced."""
    frames = 0
    wheel.advance(clock())
    while wheel.is_spinning and frames < max_frames:
        clock.advance(frame_ms)
        wheel.advance(clock())
        frames += 1
    return frames


@pytest.fixture
def clock():
    """Manual millisecond clock starting at t=1000."""
    return ManualClock(1000.0)


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def recorder():
    return RecordingObserver()


@pytest.fixture
def settings():
    """Settings independent of environment overrides."""
    return WheelSettings(
        pointer_angle=0.0,
        rotation_resistance=35.0,
        rotation_speed_max=250.0,
        drag_capture_ms=250,
        is_interactive=True,
        debug=False,
        radius=0.95,
    )


@pytest.fixture
def make_wheel(clock, scheduler, recorder, settings):
    """
    Factory for wheels wired to the shared clock, scheduler and recorder.

    Usage:
        wheel = make_wheel([1, 1, 2])               # weights
        wheel = make_wheel([Item(label="A")], rotation=90)
    """

    def _make(items=(1, 1), settings_override=None, **kwargs):
        built = [i if isinstance(i, (Item, dict)) else Item(label=f"Item {n}", weight=i) for n, i in enumerate(items)]
        kwargs.setdefault("observers", [recorder])
        kwargs.setdefault("scheduler", scheduler)
        kwargs.setdefault("clock", clock)
        return WheelService(built, settings_override or settings, **kwargs)

    return _make
