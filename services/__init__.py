"""
Application services layer.

The wheel facade lives in ``services.wheel_service``; import it from there.
"""

from services.interfaces import ITickScheduler, IWheelObserver, WheelObserver

__all__ = ["ITickScheduler", "IWheelObserver", "WheelObserver"]
