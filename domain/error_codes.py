"""
Standard error codes for the wheel engine.

These error codes allow hosts to programmatically handle specific error
conditions without parsing error message text.

Usage:
    from domain.error_codes import ITEM_NOT_FOUND, VALIDATION_ERROR
    from domain.errors import InvalidConfigurationError

    if not math.isfinite(rotation):
        raise InvalidConfigurationError("rotation must be a finite number", code=VALIDATION_ERROR)

    try:
        wheel.spin_to_item(99)
    except InvalidConfigurationError as exc:
        if exc.code == ITEM_NOT_FOUND:
            ...
"""

# General errors
VALIDATION_ERROR = "validation_error"
STATE_ERROR = "state_error"

# Item/geometry errors
NO_ITEMS = "no_items"
INVALID_ITEM = "invalid_item"
ITEM_NOT_FOUND = "item_not_found"
DEGENERATE_GEOMETRY = "degenerate_geometry"

# Spin errors
INVALID_SPIN_TARGET = "invalid_spin_target"
INVALID_DURATION = "invalid_duration"
INVALID_DIRECTION = "invalid_direction"

# Drag errors
NOT_DRAGGING = "not_dragging"
