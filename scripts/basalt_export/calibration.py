"""
In-memory calibration record: cameras (extrinsics, intrinsics, vignette)
and the gyroscope / accelerometer noise models.

Built once by the store reader and read-only afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .intrinsics import IntrinsicModel, is_fisheye
from .pose import Pose3D


GYRO_BIAS_SIZE = 12
ACCEL_BIAS_SIZE = 9


@dataclass(frozen=True)
class Vignette:
    """Per-camera vignette response, sampled at spline knots."""
    knots: Tuple[Tuple[float, ...], ...] = ()

    def values(self) -> list:
        """First component of each knot, in order."""
        return [float(knot[0]) for knot in self.knots]

    def __len__(self):
        return len(self.knots)


@dataclass(frozen=True)
class CameraEntry:
    """One camera of the rig."""
    index: int
    T_imu_cam: Pose3D
    intrinsics: IntrinsicModel
    vignette: Vignette = field(default_factory=Vignette)

    @property
    def is_primary(self) -> bool:
        return self.index == 0

    @property
    def field_prefix(self) -> str:
        # Only two naming tiers: cameras 2+ share the 'second' names
        return '' if self.is_primary else 'second'


@dataclass(frozen=True)
class ImuNoiseModel:
    """Noise / bias model of one IMU sensor."""
    noise_std: Tuple[float, float, float]
    bias_std: Tuple[float, float, float]
    calibration_bias: Tuple[float, ...]
    update_rate: Optional[float] = None  # gyroscope only


@dataclass(frozen=True)
class CalibrationRecord:
    """Full rig calibration."""
    cameras: Tuple[CameraEntry, ...]
    gyroscope: ImuNoiseModel
    accelerometer: ImuNoiseModel

    @property
    def num_cameras(self) -> int:
        return len(self.cameras)

    @property
    def update_rate(self) -> Optional[float]:
        return self.gyroscope.update_rate

    @property
    def has_fisheye(self) -> bool:
        """True if any camera uses the Kannala-Brandt model."""
        return any(is_fisheye(cam.intrinsics) for cam in self.cameras)
