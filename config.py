"""
Centralized configuration for the spin wheel engine.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


# Wheel physics
WHEEL_POINTER_ANGLE = _parse_float("WHEEL_POINTER_ANGLE", 0.0)  # 0 = north
WHEEL_ROTATION_RESISTANCE = _parse_float("WHEEL_ROTATION_RESISTANCE", 35.0)  # deg/s^2
WHEEL_ROTATION_SPEED_MAX = _parse_float("WHEEL_ROTATION_SPEED_MAX", 250.0)  # deg/s

# Drag interaction
WHEEL_DRAG_CAPTURE_MS = _parse_int("WHEEL_DRAG_CAPTURE_MS", 250)  # Window summed on release
WHEEL_DEBUG_DRAG_SAMPLES = _parse_int("WHEEL_DEBUG_DRAG_SAMPLES", 40)  # Samples kept when debugging
WHEEL_IS_INTERACTIVE = _parse_bool("WHEEL_IS_INTERACTIVE", True)
WHEEL_DEBUG = _parse_bool("WHEEL_DEBUG", False)

# Layout (fractions of the viewport's smallest side)
WHEEL_RADIUS = _parse_float("WHEEL_RADIUS", 0.95)

# Host loop
WHEEL_FRAME_RATE = _parse_int("WHEEL_FRAME_RATE", 60)  # Ticks per second for the asyncio scheduler

# Rendering
WHEEL_IMAGE_SIZE = _parse_int("WHEEL_IMAGE_SIZE", 400)
WHEEL_GIF_FRAME_MS = _parse_int("WHEEL_GIF_FRAME_MS", 40)
WHEEL_SPIN_DURATION_MS = _parse_int("WHEEL_SPIN_DURATION_MS", 4000)
WHEEL_SPIN_REVOLUTIONS = _parse_int("WHEEL_SPIN_REVOLUTIONS", 6)
