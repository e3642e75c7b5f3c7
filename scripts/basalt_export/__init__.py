"""
Basalt Calibration Export

Converts a Basalt camera/IMU calibration file into the standard
calibration JSON schema and prints a flat key/value report.

Components:
- intrinsics: camera model families (kb4, ds) and parameter checks
- pose: rigid camera-to-IMU extrinsics
- calibration: in-memory calibration record
- store: Basalt calibration file reader
- mapper: calibration record -> output JSON document
- report: calibration record -> console report lines
- cli: command-line entry point
"""

from .exceptions import (
    CalibExportError,
    ConfigError,
    LoadFailure,
    ModelIntegrityError,
    InputNotFoundWarning,
)
from .intrinsics import (
    KannalaBrandt4,
    DoubleSphere,
    UnsupportedModel,
    classify_intrinsics,
)
from .pose import Pose3D
from .calibration import CalibrationRecord, CameraEntry, ImuNoiseModel, Vignette
from .store import load_calibration, parse_calibration
from .mapper import map_calibration, dump_document
from .report import format_report

__all__ = [
    # Errors
    'CalibExportError',
    'ConfigError',
    'LoadFailure',
    'ModelIntegrityError',
    'InputNotFoundWarning',
    # Camera models
    'KannalaBrandt4',
    'DoubleSphere',
    'UnsupportedModel',
    'classify_intrinsics',
    # Calibration data
    'Pose3D',
    'CalibrationRecord',
    'CameraEntry',
    'ImuNoiseModel',
    'Vignette',
    # Reader
    'load_calibration',
    'parse_calibration',
    # Outputs
    'map_calibration',
    'dump_document',
    'format_report',
]

__version__ = '1.0.0'
