"""
Easing curves for timed wheel animations.

Each function maps progress ``n`` in [0, 1] to eased progress, with
f(0) == 0 and f(1) == 1.
"""

import math


def linear(n: float) -> float:
    return n


def ease_sin_out(n: float) -> float:
    """Sine ease-out. Default curve for spin_to / spin_to_item."""
    return math.sin(n * math.pi / 2)


def ease_quad_out(n: float) -> float:
    return 1 - pow(1 - n, 2)


def ease_cubic_out(n: float) -> float:
    return 1 - pow(1 - n, 3)


def ease_quint_out(n: float) -> float:
    """Quintic ease-out: long fast phase, then a slow crawl into the target."""
    return 1 - pow(1 - n, 5)


def ease_expo_out(n: float) -> float:
    return 1.0 if n >= 1 else 1 - pow(2, -10 * n)


EASING_FUNCTIONS = {
    "linear": linear,
    "sin_out": ease_sin_out,
    "quad_out": ease_quad_out,
    "cubic_out": ease_cubic_out,
    "quint_out": ease_quint_out,
    "expo_out": ease_expo_out,
}


def get_easing(name: str):
    """Look up an easing function by name (used by the CLI)."""
    try:
        return EASING_FUNCTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown easing '{name}'. Choose from: {', '.join(EASING_FUNCTIONS)}") from None
