"""
Drag capture buffer.

Collects drag samples while the user drags the wheel and turns the most
recent ones into a release velocity when the drag ends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from domain import error_codes
from domain.errors import WheelStateError
from domain.models.geometry import Point
from domain.models.spin_session import DragSample, DragSession
from domain.services.angle_service import diff_angle

logger = logging.getLogger("spinwheel.domain.drag_capture")


class DragCaptureBuffer:
    """
    Time-windowed history of drag samples.

    ``angle_of`` converts a point to its angle from the wheel center. It is
    re-evaluated for the previous sample on every move so a viewport resize
    mid-drag does not produce a jump.
    """

    def __init__(
        self,
        angle_of: Callable[[Point], float],
        capture_window_ms: float = 250,
        debug: bool = False,
        max_debug_samples: int = 40,
    ):
        self._angle_of = angle_of
        self.capture_window_ms = capture_window_ms
        self.debug = debug
        self.max_debug_samples = max_debug_samples
        self._session: DragSession | None = None
        self._retained: list[DragSample] = []

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def samples(self) -> list[DragSample]:
        """Samples of the active drag, or the pruned history of the last one (most recent first)."""
        if self._session is not None:
            return list(self._session.samples)
        return list(self._retained)

    def start(self, point: Point, now: float) -> None:
        """Begin a drag with a single zero-delta sample."""
        self._session = DragSession(samples=[DragSample(0.0, point.x, point.y, now)])
        self._retained = []

    def add_sample(self, point: Point, now: float) -> float:
        """
        Record a drag position.

        Returns:
            Signed angular change since the previous sample (shortest path).
        """
        session = self._require_session()
        last = session.latest
        delta = diff_angle(self._angle_of(Point(last.x, last.y)), self._angle_of(point))
        session.samples.insert(0, DragSample(delta, point.x, point.y, now))

        # Debug history is only kept for visualisation
        if self.debug and len(session.samples) >= self.max_debug_samples:
            session.samples.pop()

        return delta

    def end(self, now: float) -> float:
        """
        Finish the drag.

        Sums the deltas of samples inside the capture window, walking from the
        newest sample and truncating the history at the first stale one.

        Returns:
            Release velocity in degrees per second (0.0 when the net drag is zero).
        """
        session = self._require_session()
        total = 0.0
        kept = len(session.samples)
        for i, sample in enumerate(session.samples):
            if now - sample.timestamp > self.capture_window_ms:
                kept = i
                break
            total += sample.angular_delta

        self._retained = session.samples[:kept]
        self._session = None

        if total == 0:
            return 0.0
        velocity = total * (1000 / self.capture_window_ms)
        logger.debug(f"Drag released: {total:.2f} deg over {kept} samples -> {velocity:.1f} deg/s")
        return velocity

    def cancel(self) -> None:
        self._session = None

    def _require_session(self) -> DragSession:
        if self._session is None:
            raise WheelStateError("No drag in progress; call drag_start first", code=error_codes.NOT_DRAGGING)
        return self._session
