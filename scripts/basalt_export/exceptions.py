"""
Exception classes for the Basalt calibration exporter.

Load failures (unreadable or corrupt calibration files) are kept separate
from model integrity faults (a recognized camera model with the wrong
number of parameters) so callers can report them differently.
"""


class CalibExportError(Exception):
    """Base class for all exporter errors."""


class ConfigError(CalibExportError):
    """Missing or invalid command-line / config-file arguments."""


class LoadFailure(CalibExportError):
    """
    The calibration file could not be read or parsed.

    Attributes:
        path: Path of the calibration file (may be None for in-memory data)
        reason: Short description of what went wrong
    """

    def __init__(self, path=None, reason: str = "could not load camera calibration"):
        self.path = path
        self.reason = reason
        if path is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason}: {path}")


class ModelIntegrityError(CalibExportError):
    """
    A recognized parameter vector has the wrong length or wrong names.

    Attributes:
        tag: Model or block name (e.g. 'kb4', 'calib_gyro_bias')
        expected: Expected number of parameters
        actual: Number of parameters found
        unknown: Parameter names not valid for the model
    """

    def __init__(self, tag: str, expected: int, actual: int, unknown=()):
        self.tag = tag
        self.expected = expected
        self.actual = actual
        self.unknown = tuple(unknown)
        message = f"'{tag}' expects {expected} parameters, got {actual}"
        if self.unknown:
            message += f" (unknown names: {', '.join(self.unknown)})"
        super().__init__(message)


class InputNotFoundWarning(UserWarning):
    """The calibration path does not exist; loading will still be attempted."""
