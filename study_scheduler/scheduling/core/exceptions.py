"""
Errors raised inside the scheduling engine.
"""


class SchedulingError(Exception):
    """Raised when the engine cannot build a plan from its inputs."""


class InvalidTimeError(SchedulingError, ValueError):
    """Raised for a time value that is not a valid HH:mm string."""
