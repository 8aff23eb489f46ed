"""
Spin session and drag session domain models.

A wheel is driven by exactly one SpinSession at a time. The variants are
separate types so "which mode is active" is answered by ``isinstance`` rather
than by checking which optional fields happen to be set.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

EasingFunction = Callable[[float], float]


@dataclass(frozen=True)
class Idle:
    """The wheel is not being driven."""


@dataclass
class FreeSpin:
    """
    Velocity-driven rotation decaying under constant resistance.

    ``direction`` is +1 for clockwise (or stationary) and -1 for anticlockwise.
    ``last_frame_time`` is unset until the first tick establishes a baseline.
    """

    speed: float
    direction: int
    resistance: float
    last_frame_time: float | None = None


@dataclass(frozen=True)
class TimedAnimation:
    """Rotation interpolated from start to end rotation between two clock times (ms)."""

    start_rotation: float
    end_rotation: float
    start_time: float
    end_time: float
    easing: EasingFunction

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


SpinSession = Union[Idle, FreeSpin, TimedAnimation]


@dataclass(frozen=True)
class DragSample:
    """One captured drag position. ``angular_delta`` is relative to the previous sample."""

    angular_delta: float
    x: float
    y: float
    timestamp: float


@dataclass
class DragSession:
    """Samples captured since the drag started, most recent first."""

    samples: list[DragSample] = field(default_factory=list)

    @property
    def latest(self) -> DragSample:
        return self.samples[0]
