"""
Domain services containing the wheel's pure geometry and physics logic.
"""

from domain.services.drag_capture import DragCaptureBuffer
from domain.services.rotation_physics import RotationPhysics, TickOutcome, limit_speed

__all__ = ["DragCaptureBuffer", "RotationPhysics", "TickOutcome", "limit_speed"]
