"""
Exceptions
==========

Errors raised by the workout session and the landmark sources.
"""


class FormCoachError(Exception):
    """Base class for formcoach errors."""


class InvalidTargetError(FormCoachError, ValueError):
    """Target rep count is not a positive integer."""


class SourceInitError(FormCoachError, RuntimeError):
    """A landmark source could not be initialized."""


class CameraUnavailableError(SourceInitError):
    """Camera could not be opened or permission was denied."""


class ModelInitError(SourceInitError):
    """Pose-estimation model could not be loaded."""
