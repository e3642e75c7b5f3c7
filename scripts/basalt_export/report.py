"""
Console report: the exported calibration as flat ``key value;`` lines.

Primary camera keys are unprefixed (focalLengthX, imuToCameraMatrix);
every other camera uses the 'second' prefix (secondFocalLengthX,
secondImuToCameraMatrix). The extrinsic matrix is printed column-major,
unlike the row-major matrix in the JSON document.

Intrinsics lines are printed for double-sphere cameras too (focal
length, principal point, xi, alpha), not only for kannala-brandt4.
"""

from typing import Iterable, List

from .calibration import CalibrationRecord, CameraEntry
from .intrinsics import DoubleSphere, KannalaBrandt4


def format_scalar(value: float) -> str:
    """Format with 18 significant digits."""
    return format(float(value), '.18g')


def format_values(values: Iterable[float]) -> str:
    return ','.join(format_scalar(v) for v in values)


def prefixed(prefix: str, key: str) -> str:
    """'focalLengthX' -> 'secondFocalLengthX' for prefix 'second'."""
    if not prefix:
        return key
    return prefix + key[0].upper() + key[1:]


def camera_lines(camera: CameraEntry) -> List[str]:
    """Report lines for one camera."""
    prefix = camera.field_prefix
    model = camera.intrinsics
    lines = []

    if isinstance(model, (KannalaBrandt4, DoubleSphere)):
        for key, value in (('focalLengthX', model.fx),
                           ('focalLengthY', model.fy),
                           ('principalPointX', model.cx),
                           ('principalPointY', model.cy)):
            lines.append(f"{prefixed(prefix, key)} {format_scalar(value)};")

    if isinstance(model, KannalaBrandt4):
        lines.append(f"{prefixed(prefix, 'distortionCoeffs')} {format_values(model.distortion)};")
    elif isinstance(model, DoubleSphere):
        lines.append(f"{prefixed(prefix, 'xi')} {format_scalar(model.xi)};")
        lines.append(f"{prefixed(prefix, 'alpha')} {format_scalar(model.alpha)};")

    # Column-major: columns outer, rows inner
    T = camera.T_imu_cam.inverse().matrix()
    lines.append(f"{prefixed(prefix, 'imuToCameraMatrix')} {format_values(T.T.flatten())};")
    return lines


def format_report(record: CalibrationRecord) -> List[str]:
    """
    Build the console report for a calibration record.

    Args:
        record: Loaded calibration

    Returns:
        List of lines, each terminated with ';'
    """
    lines = []
    for camera in record.cameras:
        lines.extend(camera_lines(camera))

    if record.has_fisheye:
        lines.append("fisheyeCamera true;")

    lines.append(f"cameraCount {record.num_cameras};")
    return lines
