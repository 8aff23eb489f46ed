"""
Exceptions raised by the wheel engine.

Every error carries a machine-readable ``code`` from ``domain.error_codes``.
"""

from domain import error_codes


class InvalidConfigurationError(ValueError):
    """A setting, item list or spin argument was rejected at the point it was supplied."""

    def __init__(self, message: str, code: str = error_codes.VALIDATION_ERROR):
        super().__init__(message)
        self.code = code


class DegenerateGeometryError(InvalidConfigurationError):
    """Item weights cannot tile the circle (zero, negative or non-finite sum)."""

    def __init__(self, message: str):
        super().__init__(message, code=error_codes.DEGENERATE_GEOMETRY)


class WheelStateError(RuntimeError):
    """The host called an operation that is not valid in the wheel's current state."""

    def __init__(self, message: str, code: str = error_codes.STATE_ERROR):
        super().__init__(message)
        self.code = code
