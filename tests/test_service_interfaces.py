"""Tests for service interfaces."""

import inspect
from abc import ABC

import pytest


class TestServiceInterfacesExist:
    """Test that all expected interfaces are defined."""

    def test_interfaces_module_imports(self):
        """Service interfaces module can be imported."""
        from services import interfaces

        assert interfaces is not None

    def test_wheel_observer_interface(self):
        """IWheelObserver interface exists with one handler per event."""
        from services.interfaces import IWheelObserver

        assert issubclass(IWheelObserver, ABC)
        assert hasattr(IWheelObserver, "on_spin_start")
        assert hasattr(IWheelObserver, "on_rest")
        assert hasattr(IWheelObserver, "on_current_index_change")

    def test_tick_scheduler_interface(self):
        """ITickScheduler interface exists with expected methods."""
        from services.interfaces import ITickScheduler

        assert issubclass(ITickScheduler, ABC)
        assert hasattr(ITickScheduler, "request_tick")
        assert hasattr(ITickScheduler, "cancel_tick")


class TestInterfacesAreAbstract:
    """Test that interfaces cannot be instantiated directly."""

    @pytest.mark.parametrize("name", ["IWheelObserver", "ITickScheduler"])
    def test_cannot_instantiate(self, name):
        from services import interfaces

        with pytest.raises(TypeError):
            getattr(interfaces, name)()

    def test_all_interface_methods_are_abstract(self):
        from services.interfaces import ITickScheduler, IWheelObserver

        for iface in (IWheelObserver, ITickScheduler):
            methods = [n for n, m in inspect.getmembers(iface, inspect.isfunction) if not n.startswith("_")]
            assert methods
            assert set(methods) == set(iface.__abstractmethods__)


class TestImplementations:
    """Test that concrete classes implement the interfaces."""

    def test_wheel_observer_is_concrete(self):
        from services.interfaces import IWheelObserver, WheelObserver

        observer = WheelObserver()
        assert isinstance(observer, IWheelObserver)

    def test_schedulers_implement_interface(self):
        from infrastructure.tick_scheduler import AsyncioTickScheduler, ManualTickScheduler
        from services.interfaces import ITickScheduler

        assert issubclass(ManualTickScheduler, ITickScheduler)
        assert issubclass(AsyncioTickScheduler, ITickScheduler)
