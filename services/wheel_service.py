"""
WheelService: the spin wheel facade.

Composes the angle calculator, the current-index resolver, the drag capture
buffer and the rotation physics, and exposes them to a host that supplies
ticks, input points and a renderer.

Within one tick the order is fixed: physics updates the rotation, item angles
are recomputed from it, the current index is resolved from the angles, then
events fire. Observers therefore always see a consistent
(rotation, angles, current index) triple.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Callable, Iterable
from typing import Any

import config
from domain import error_codes
from domain.errors import InvalidConfigurationError
from domain.models.events import (
    SPIN_METHOD_INTERACT,
    SPIN_METHOD_SPIN,
    SPIN_METHOD_SPIN_TO,
    SPIN_METHOD_SPIN_TO_ITEM,
    CurrentIndexChangeEvent,
    RestEvent,
    SpinStartEvent,
)
from domain.models.geometry import AngleRange, Point, WheelGeometry
from domain.models.item import Item, build_items
from domain.models.settings import WheelSettings
from domain.models.spin_session import DragSample, EasingFunction
from domain.services.angle_service import (
    angle_from_center,
    calc_wheel_rotation_for_target_angle,
    compute_item_angles,
    item_center_angle,
    item_random_angle,
    normalize_angle,
    resolve_current_index,
)
from domain.services.drag_capture import DragCaptureBuffer
from domain.services.rotation_physics import RotationPhysics
from services.interfaces import ITickScheduler, IWheelObserver
from utils.debug_logging import debug_log

logger = logging.getLogger("spinwheel.services.wheel")


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class WheelService:
    """
    A weighted spin wheel driven by host ticks.

    Args:
        items: Item instances or mappings of Item fields
        settings: Behaviour settings (defaults come from config)
        rotation: Initial rotation in degrees
        observers: Receivers of lifecycle events
        scheduler: Host loop used to request ticks; without one the host
            must poll ``needs_redraw``/``is_spinning`` and call ``advance``
        clock: Monotonic millisecond clock, must share its base with the
            timestamps passed to ``advance``
        rng: Random source for ``spin_to_item(spin_to_center=False)``
    """

    def __init__(
        self,
        items: Iterable[Item | dict] | None = None,
        settings: WheelSettings | None = None,
        *,
        rotation: float = 0.0,
        observers: Iterable[IWheelObserver] = (),
        scheduler: ITickScheduler | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ):
        self._settings = settings or WheelSettings()
        self._items: tuple[Item, ...] = build_items(items)
        self._validate_tiling(self._items)
        self._physics = RotationPhysics(self._validate_rotation(rotation))
        self._drag = DragCaptureBuffer(
            self.angle_from_center,
            capture_window_ms=self._settings.drag_capture_ms,
            debug=self._settings.debug,
            max_debug_samples=config.WHEEL_DEBUG_DRAG_SAMPLES,
        )
        self._observers: list[IWheelObserver] = []
        for observer in observers:
            self.add_observer(observer)
        self._scheduler = scheduler
        self._clock = clock or _monotonic_ms
        self._rng = rng or random.Random()

        self._viewport: tuple[float, float] | None = None
        self._geometry = WheelGeometry()
        self._angles: list[AngleRange] = []
        self._current_index: int | None = None
        self._tick_pending = False
        self._needs_redraw = False
        self._closed = False

        # The first resolution never raises a change event
        self._initialised = False
        self._refresh_angles()
        self._initialised = True
        self.refresh()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def settings(self) -> WheelSettings:
        return self._settings

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def rotation(self) -> float:
        return self._physics.rotation

    @property
    def rotation_speed(self) -> float:
        """Free-spin speed in degrees/second; 0 when idle or animating."""
        return self._physics.rotation_speed

    @property
    def is_spinning(self) -> bool:
        return self._physics.is_active

    @property
    def is_dragging(self) -> bool:
        return self._drag.is_active

    @property
    def current_index(self) -> int | None:
        return self._current_index

    def get_current_index(self) -> int | None:
        """Index of the item under the pointer (None when the wheel has no items)."""
        return self._current_index

    @property
    def angles(self) -> list[AngleRange]:
        """Item angles at the current rotation."""
        return list(self._angles)

    @property
    def geometry(self) -> WheelGeometry:
        return self._geometry

    @property
    def drag_samples(self) -> list[DragSample]:
        """Samples of the current (or last) drag, most recent first. Used by debug drawing."""
        return self._drag.samples

    @property
    def needs_redraw(self) -> bool:
        return self._needs_redraw

    def take_redraw(self) -> bool:
        """Return and clear the redraw flag. Hosts call this once per render pass."""
        dirty = self._needs_redraw
        self._needs_redraw = False
        return dirty

    def get_item_angles(self, rotation: float | None = None) -> list[AngleRange]:
        """
        Item angles at ``rotation`` (defaults to the current rotation).

        The rotation is reduced into [0, 360) first, so the first range starts
        there however many turns the wheel has made.
        """
        if not self._items:
            return []
        offset = self._physics.rotation if rotation is None else rotation
        return compute_item_angles([item.weight for item in self._items], normalize_angle(offset))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_items(self, items: Iterable[Item | dict] | None) -> None:
        """Replace the item list wholesale. On error the previous items are kept."""
        try:
            new_items = build_items(items)
            self._validate_tiling(new_items)
        except InvalidConfigurationError as exc:
            logger.warning(f"Rejected item list: {exc}")
            raise

        self._items = new_items
        logger.debug(f"Wheel now has {len(new_items)} items")
        self._refresh_angles()
        self.refresh()

    def set_rotation(self, rotation: float) -> None:
        """Assign the rotation directly (degrees, unbounded)."""
        self._physics.rotation = self._validate_rotation(rotation)
        self._refresh_angles()
        self.refresh()

    def update_settings(self, **changes: Any) -> WheelSettings:
        """
        Apply several setting changes at once.

        All changes are validated together; on error nothing is applied and the
        previous settings are kept. ``None`` restores a field's default.
        """
        try:
            new_settings = self._settings.replace(**changes)
        except InvalidConfigurationError as exc:
            logger.warning(f"Rejected wheel settings {changes}: {exc}")
            raise

        old_settings = self._settings
        self._settings = new_settings
        self._drag.capture_window_ms = new_settings.drag_capture_ms
        self._drag.debug = new_settings.debug

        if (new_settings.radius, new_settings.offset_x, new_settings.offset_y) != (
            old_settings.radius, old_settings.offset_x, old_settings.offset_y
        ):
            self._refresh_geometry()
        if new_settings.pointer_angle != old_settings.pointer_angle:
            self._refresh_angles()
        if not new_settings.is_interactive and self._drag.is_active:
            self._drag.cancel()

        self.refresh()
        return new_settings

    def set_viewport(self, width: float, height: float) -> WheelGeometry:
        """Tell the wheel how large the host's drawing surface is (pixels)."""
        for name, val in (("width", width), ("height", height)):
            if not _is_number(val) or not math.isfinite(val) or val <= 0:
                raise InvalidConfigurationError(f"Viewport {name} must be a positive number, got {val!r}")
        self._viewport = (float(width), float(height))
        self._refresh_geometry()
        self.refresh()
        return self._geometry

    # ------------------------------------------------------------------
    # Observers & scheduling
    # ------------------------------------------------------------------

    def add_observer(self, observer: IWheelObserver) -> None:
        if not isinstance(observer, IWheelObserver):
            raise InvalidConfigurationError("observer must implement IWheelObserver")
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: IWheelObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def refresh(self) -> None:
        """Mark the wheel dirty and request one tick (requests coalesce until it runs)."""
        self._needs_redraw = True
        self._request_tick()

    def close(self) -> None:
        """Stop the wheel and drop any pending tick."""
        self._physics.stop()
        self._drag.cancel()
        if self._scheduler is not None and self._tick_pending:
            self._scheduler.cancel_tick()
        self._tick_pending = False
        self._closed = True

    def _request_tick(self) -> None:
        if self._closed or self._scheduler is None or self._tick_pending:
            return
        self._tick_pending = True
        self._scheduler.request_tick(self.advance)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self, now: float) -> bool:
        """
        Advance the wheel to time ``now`` (monotonic ms). Call once per frame.

        Returns:
            True while another tick is needed (free spin or animation active).
        """
        self._tick_pending = False
        if self._closed:
            return False

        session = self._physics.session
        outcome = self._physics.tick(now)
        if outcome.rotated:
            self._refresh_angles()
            self._needs_redraw = True

        if outcome.came_to_rest:
            logger.info(f"Wheel at rest on item {self._current_index} (rotation {self.rotation:.2f})")
            debug_log("rest", session, self.rotation, self._current_index)
            self._emit("on_rest", RestEvent(current_index=self._current_index, rotation=self.rotation))

        still_active = self._physics.is_active
        if still_active:
            self._request_tick()
        return still_active

    # ------------------------------------------------------------------
    # Spinning
    # ------------------------------------------------------------------

    def spin(self, rotation_speed: float = 0) -> None:
        """
        Spin at ``rotation_speed`` degrees/second (positive is clockwise).

        The wheel slows down according to ``rotation_resistance``. A speed of
        0 just stops the wheel.
        """
        if not _is_number(rotation_speed) or math.isnan(rotation_speed):
            raise InvalidConfigurationError(f"rotation_speed must be a number, got {rotation_speed!r}")
        self._begin_spin(rotation_speed, SPIN_METHOD_SPIN)

    def spin_to(self, rotation: float, duration: float = 0, easing: EasingFunction | None = None) -> None:
        """
        Animate to ``rotation`` over ``duration`` milliseconds.

        ``easing`` maps progress in [0, 1] to eased progress; defaults to sine
        ease-out. Any free spin is cancelled.
        """
        self._physics.begin_animation(rotation, duration, self._clock(), easing)
        logger.info(f"Spinning to rotation {rotation} over {duration}ms")
        debug_log(
            "spin_start", self._physics.session, self.rotation, self._current_index, {"method": SPIN_METHOD_SPIN_TO}
        )
        self._emit("on_spin_start", SpinStartEvent(
            method=SPIN_METHOD_SPIN_TO, target_rotation=float(rotation), duration=duration,
        ))
        self.refresh()

    def spin_to_item(
        self,
        item_index: int,
        duration: float = 0,
        spin_to_center: bool = True,
        number_of_revolutions: float = 1,
        direction: int = 1,
        easing: EasingFunction | None = None,
    ) -> float:
        """
        Animate so that item ``item_index`` comes to rest under the pointer.

        Args:
            item_index: Target item
            duration: Animation length in milliseconds
            spin_to_center: Land on the item's center, otherwise on a random angle inside it
            number_of_revolutions: Full turns to add before landing
            direction: 1 for clockwise, -1 for anticlockwise
            easing: Optional easing function

        Returns:
            The target rotation.
        """
        if isinstance(item_index, bool) or not isinstance(item_index, int) or not 0 <= item_index < len(self._items):
            raise InvalidConfigurationError(
                f"No item at index {item_index!r} (wheel has {len(self._items)} items)",
                code=error_codes.ITEM_NOT_FOUND,
            )
        if direction not in (1, -1):
            raise InvalidConfigurationError(
                f"direction must be 1 or -1, got {direction!r}", code=error_codes.INVALID_DIRECTION
            )
        if not _is_number(number_of_revolutions) or not math.isfinite(number_of_revolutions):
            raise InvalidConfigurationError(
                f"number_of_revolutions must be a number, got {number_of_revolutions!r}"
            )

        item_angles = self.get_item_angles(0)
        if spin_to_center:
            item_angle = item_center_angle(item_angles, item_index)
        else:
            item_angle = item_random_angle(item_angles, item_index, self._rng)

        target = calc_wheel_rotation_for_target_angle(
            self.rotation, item_angle - self._settings.pointer_angle, direction
        )
        target += number_of_revolutions * 360 * direction

        self._physics.begin_animation(target, duration, self._clock(), easing)
        logger.info(f"Spinning to item {item_index} (rotation {target:.2f}) over {duration}ms")
        debug_log("spin_start", self._physics.session, self.rotation, self._current_index, {
            "method": SPIN_METHOD_SPIN_TO_ITEM, "targetItemIndex": item_index,
        })
        self._emit("on_spin_start", SpinStartEvent(
            method=SPIN_METHOD_SPIN_TO_ITEM,
            target_item_index=item_index,
            target_rotation=target,
            duration=duration,
        ))
        self.refresh()
        return target

    def stop(self) -> None:
        """Stop immediately, whichever way the wheel was spun. No event fires."""
        self._physics.stop()

    def _begin_spin(self, speed: float, method: str) -> float:
        applied = self._physics.begin_free_spin(
            speed, self._settings.rotation_speed_max, self._settings.rotation_resistance
        )
        if applied != 0:
            logger.info(f"Wheel spin ({method}) at {applied:.1f} deg/s")
            debug_log("spin_start", self._physics.session, self.rotation, self._current_index, {"method": method})
            self._emit("on_spin_start", SpinStartEvent(
                method=method,
                rotation_speed=applied,
                rotation_resistance=self._settings.rotation_resistance,
            ))
        self.refresh()
        return applied

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------

    def hit_test(self, point: Point) -> bool:
        """True if ``point`` lies inside the wheel."""
        return self._geometry.contains(point)

    def angle_from_center(self, point: Point) -> float:
        """Angle of ``point`` around the wheel center (0 is north, clockwise)."""
        return angle_from_center(self._geometry.center_x, self._geometry.center_y, point.x, point.y)

    def try_begin_drag(self, point: Point) -> bool:
        """Start a drag if the wheel is interactive and ``point`` is on it."""
        if not self._settings.is_interactive or not self.hit_test(point):
            return False
        self.drag_start(point)
        return True

    def drag_start(self, point: Point) -> None:
        """Grab the wheel at ``point``; interrupts any spin or animation."""
        self._physics.stop()
        self._drag.start(point, self._clock())

    def drag_move(self, point: Point) -> float:
        """
        Move the grabbed wheel to ``point``; rotation follows the pointer 1:1.

        Returns:
            The angular change applied.
        """
        delta = self._drag.add_sample(point, self._clock())
        if delta:
            self._physics.rotation += delta
            self._refresh_angles()
        self.refresh()
        return delta

    def drag_end(self) -> float:
        """
        Release the wheel. It keeps spinning at the speed of the recent drag.

        Returns:
            The free-spin speed applied (0 when the recent drag nets to zero).
        """
        velocity = self._drag.end(self._clock())
        if velocity == 0:
            self.refresh()
            return 0.0
        return self._begin_spin(velocity, SPIN_METHOD_INTERACT)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh_angles(self) -> None:
        if not self._items:
            self._angles = []
            self._current_index = None
            return

        self._angles = self.get_item_angles()
        new_index, changed = resolve_current_index(
            self._angles, self._settings.pointer_angle, self._current_index
        )
        if not changed:
            return
        self._current_index = new_index
        if self._initialised and new_index is not None:
            self._emit("on_current_index_change", CurrentIndexChangeEvent(current_index=new_index))

    def _refresh_geometry(self) -> None:
        if self._viewport is None:
            return
        width, height = self._viewport
        self._geometry = WheelGeometry.for_viewport(
            width,
            height,
            self._settings.radius,
            self._settings.offset_x,
            self._settings.offset_y,
        )

    def _emit(self, handler: str, event: Any) -> None:
        for observer in list(self._observers):
            getattr(observer, handler)(event)

    @staticmethod
    def _validate_tiling(items: tuple[Item, ...]) -> None:
        if items:
            compute_item_angles([item.weight for item in items])

    @staticmethod
    def _validate_rotation(rotation: float) -> float:
        if not _is_number(rotation) or not math.isfinite(rotation):
            raise InvalidConfigurationError(f"rotation must be a finite number, got {rotation!r}")
        return float(rotation)
