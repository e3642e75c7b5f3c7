"""
Basalt Calibration Reader
=========================

Loads a Basalt calibration file (cereal JSON archive) into a
CalibrationRecord. Expected layout:

    {
      "value0": {
        "T_imu_cam": [{"px": .., "py": .., "pz": .., "qx": .., "qy": .., "qz": .., "qw": ..}, ...],
        "intrinsics": [{"camera_type": "ds", "intrinsics": {"fx": .., ...}}, ...],
        "vignette": [{"value0": start_ns, "value1": dt_ns, "value2": [[k0], [k1], ...]}, ...],
        "calib_accel_bias": [9 values],
        "calib_gyro_bias": [12 values],
        "imu_update_rate": 200.0,
        "accel_noise_std": [x, y, z],
        "gyro_noise_std": [x, y, z],
        "accel_bias_std": [x, y, z],
        "gyro_bias_std": [x, y, z]
      }
    }
"""

import json
import logging
import warnings
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from .calibration import (
    ACCEL_BIAS_SIZE,
    GYRO_BIAS_SIZE,
    CalibrationRecord,
    CameraEntry,
    ImuNoiseModel,
    Vignette,
)
from .exceptions import InputNotFoundWarning, LoadFailure, ModelIntegrityError
from .intrinsics import SUPPORTED_MODELS, IntrinsicModel, classify_intrinsics, param_names
from .pose import Pose3D

logger = logging.getLogger(__name__)


def check_input(calib_path) -> bool:
    """
    Warn if the calibration file is missing.

    Loading is still attempted by the caller and fails there.
    """
    if not Path(calib_path).exists():
        warnings.warn(f"No file found {calib_path}", InputNotFoundWarning, stacklevel=2)
        return False
    return True


def default_gyro_bias() -> List[float]:
    """Zero bias followed by identity 3x3 scale/misalignment (row-major)."""
    return [0.0] * 3 + np.eye(3).flatten().tolist()


def default_accel_bias() -> List[float]:
    """Zero bias followed by the 6 lower-triangular scale terms (zero)."""
    return [0.0] * ACCEL_BIAS_SIZE


def _vector3(value: Any, key: str) -> Tuple[float, float, float]:
    """Read a 3-vector; older Basalt files store a single scalar."""
    arr = np.atleast_1d(np.asarray(value, dtype=np.float64)).flatten()
    if arr.size == 1:
        arr = np.repeat(arr, 3)
    if arr.size != 3:
        raise ModelIntegrityError(key, 3, int(arr.size))
    return tuple(float(v) for v in arr)


def _bias_vector(calib: dict, key: str, size: int, default: List[float]) -> Tuple[float, ...]:
    values = calib.get(key)
    if values is None:
        logger.debug(f"{key} not present, using identity calibration")
        values = default
    values = [float(v) for v in values]
    if len(values) != size:
        raise ModelIntegrityError(key, size, len(values))
    return tuple(values)


def parse_intrinsics(entry: Any) -> IntrinsicModel:
    """
    Parse one entry of the Basalt 'intrinsics' list.

    Named parameters are reordered into canonical order when the names
    match the camera type exactly. Supported models with any other set of
    names are rejected; unknown families keep the file order.
    """
    tag = entry['camera_type']
    raw = entry['intrinsics']

    if isinstance(raw, dict):
        names = param_names(tag)
        if names is not None and set(raw.keys()) == set(names):
            params = [raw[name] for name in names]
        elif tag in SUPPORTED_MODELS:
            unknown = sorted(set(raw.keys()) - set(names))
            raise ModelIntegrityError(tag, len(names), len(raw), unknown=unknown)
        else:
            params = list(raw.values())
    else:
        params = list(raw)

    return classify_intrinsics(tag, params)


def parse_vignette(entry: Any) -> Vignette:
    """Parse a serialized vignette spline (or a bare list of knots)."""
    if entry is None:
        return Vignette()
    if isinstance(entry, dict):
        knots = entry.get('value2', [])
    else:
        knots = entry

    parsed = []
    for knot in knots:
        parsed.append(tuple(float(v) for v in np.atleast_1d(knot)))
    return Vignette(knots=tuple(parsed))


def parse_calibration(data: Dict[str, Any]) -> CalibrationRecord:
    """
    Build a CalibrationRecord from a decoded Basalt calibration document.

    Args:
        data: Decoded JSON, with or without the top-level 'value0' wrapper

    Returns:
        CalibrationRecord

    Raises:
        LoadFailure: structure is malformed (missing keys, mismatched lists)
        ModelIntegrityError: a parameter vector has the wrong length
    """
    if not isinstance(data, dict):
        raise LoadFailure(reason="calibration root is not an object")
    calib = data.get('value0', data)

    try:
        poses = calib['T_imu_cam']
        intrinsics = calib['intrinsics']
        for key, value in (('T_imu_cam', poses), ('intrinsics', intrinsics)):
            if not isinstance(value, list):
                raise LoadFailure(reason=f"{key} must be a list, got {type(value).__name__}")
        update_rate = float(calib['imu_update_rate'])
        gyro = ImuNoiseModel(
            noise_std=_vector3(calib['gyro_noise_std'], 'gyro_noise_std'),
            bias_std=_vector3(calib['gyro_bias_std'], 'gyro_bias_std'),
            calibration_bias=_bias_vector(calib, 'calib_gyro_bias',
                                          GYRO_BIAS_SIZE, default_gyro_bias()),
            update_rate=update_rate,
        )
        accel = ImuNoiseModel(
            noise_std=_vector3(calib['accel_noise_std'], 'accel_noise_std'),
            bias_std=_vector3(calib['accel_bias_std'], 'accel_bias_std'),
            calibration_bias=_bias_vector(calib, 'calib_accel_bias',
                                          ACCEL_BIAS_SIZE, default_accel_bias()),
        )
    except KeyError as e:
        raise LoadFailure(reason=f"missing key {e}") from e
    except (TypeError, ValueError) as e:
        raise LoadFailure(reason=f"invalid value ({e})") from e

    if len(poses) != len(intrinsics):
        raise LoadFailure(
            reason=f"T_imu_cam has {len(poses)} entries but intrinsics has {len(intrinsics)}"
        )

    vignettes: Sequence[Any] = calib.get('vignette') or []

    cameras = []
    for i, (pose, intr) in enumerate(zip(poses, intrinsics)):
        try:
            T_imu_cam = Pose3D.from_basalt(pose)
            model = parse_intrinsics(intr)
            vignette = parse_vignette(vignettes[i] if i < len(vignettes) else None)
        except KeyError as e:
            raise LoadFailure(reason=f"camera {i}: missing key {e}") from e
        except (TypeError, ValueError) as e:
            raise LoadFailure(reason=f"camera {i}: invalid value ({e})") from e

        logger.debug(f"T_imu_cam[{i}]\n{T_imu_cam.matrix()}")
        cameras.append(CameraEntry(index=i, T_imu_cam=T_imu_cam,
                                   intrinsics=model, vignette=vignette))

    return CalibrationRecord(cameras=tuple(cameras), gyroscope=gyro, accelerometer=accel)


def load_calibration(calib_path) -> CalibrationRecord:
    """
    Load a Basalt calibration file.

    Args:
        calib_path: Path to the Basalt calibration JSON

    Returns:
        CalibrationRecord

    Raises:
        LoadFailure: file cannot be opened or is not a valid archive
        ModelIntegrityError: a parameter vector has the wrong length
    """
    calib_path = Path(calib_path)
    try:
        with open(calib_path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise LoadFailure(calib_path, f"could not load camera calibration ({e.strerror})") from e
    except json.JSONDecodeError as e:
        raise LoadFailure(calib_path, f"corrupt calibration archive ({e.msg})") from e

    try:
        record = parse_calibration(data)
    except LoadFailure as e:
        raise LoadFailure(calib_path, e.reason) from e

    logger.info(f"Loaded calibration with {record.num_cameras} cameras")
    return record
