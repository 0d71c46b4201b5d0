class SchedulingError(Exception):
    """Base class for errors raised by the scheduling engine."""


class InvalidOptionsError(SchedulingError, ValueError):
    """Scheduling options describe an impossible working calendar."""
