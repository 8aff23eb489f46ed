"""
Structured JSONL trace of wheel spin transitions.

Enabled when the DEBUG_LOG_PATH env var is set. Each line records one
transition (spin start, rest) together with the spin session that caused
it, so a spin can be replayed from the trace without the normal logs.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import time
from typing import Any

logger = logging.getLogger("spinwheel.utils.trace")


def session_fields(session: Any) -> dict[str, Any]:
    """
    JSON-safe view of a spin session: its numeric and text fields.

    Callables (the animation's easing function) are left out.
    """
    if not dataclasses.is_dataclass(session):
        return {}
    return {
        f.name: getattr(session, f.name)
        for f in dataclasses.fields(session)
        if isinstance(getattr(session, f.name), (int, float, str, type(None)))
    }


def debug_log(
    event: str,
    session: Any,
    rotation: float,
    current_index: int | None,
    data: dict[str, Any] | None = None,
) -> None:
    """
    Append a trace entry for ``event`` to DEBUG_LOG_PATH if configured.

    Args:
        event: Transition name, e.g. "spin_start" or "rest"
        session: The spin session that started or ended
        rotation: Wheel rotation at the transition
        current_index: Item under the pointer at the transition
        data: Extra event fields
    """
    path = os.getenv("DEBUG_LOG_PATH")
    if not path:
        return

    payload = {
        "event": event,
        "timestamp": int(time.time() * 1000),
        "session": type(session).__name__,
        "sessionState": session_fields(session),
        "rotation": rotation,
        "currentIndex": current_index,
        "data": data or {},
    }

    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload) + "\n")
    except OSError as exc:
        logger.debug(f"Could not write wheel trace to {path}: {exc}")
