"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts between the wheel and its
host: the observer that receives lifecycle events and the scheduler that
delivers ticks.

Usage:
    class ResultAnnouncer(WheelObserver):
        def on_rest(self, event: RestEvent) -> None:
            print(f"Landed on item {event.current_index}")

    wheel = WheelService(items, scheduler=AsyncioTickScheduler())
    wheel.add_observer(ResultAnnouncer())

Benefits:
- Typed, fixed set of event variants instead of nullable callback fields
- Physics can be driven by synthetic timestamps in tests
- Easier mocking in tests
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.events import CurrentIndexChangeEvent, RestEvent, SpinStartEvent


class IWheelObserver(ABC):
    """Interface for receiving wheel lifecycle events."""

    @abstractmethod
    def on_spin_start(self, event: "SpinStartEvent") -> None:
        """Called when a spin, animation or drag release sets the wheel in motion."""
        ...

    @abstractmethod
    def on_rest(self, event: "RestEvent") -> None:
        """Called once when a spin or animation comes to rest on its own."""
        ...

    @abstractmethod
    def on_current_index_change(self, event: "CurrentIndexChangeEvent") -> None:
        """Called when a different item moves under the pointer."""
        ...


class WheelObserver(IWheelObserver):
    """Observer with no-op handlers; override only the events you need."""

    def on_spin_start(self, event: "SpinStartEvent") -> None:
        pass

    def on_rest(self, event: "RestEvent") -> None:
        pass

    def on_current_index_change(self, event: "CurrentIndexChangeEvent") -> None:
        pass


class ITickScheduler(ABC):
    """Interface for the host loop that delivers ticks (one per display refresh)."""

    @abstractmethod
    def request_tick(self, callback: Callable[[float], None]) -> None:
        """Arrange for ``callback(now_ms)`` to be called on the next frame."""
        ...

    @abstractmethod
    def cancel_tick(self) -> None:
        """Drop a pending tick request, if any."""
        ...
