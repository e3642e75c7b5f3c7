"""
Map a CalibrationRecord onto the exported calibration JSON schema.

Output layout:

    {
      "cameras": [
        {"models": [...], "vignette": [...], "imuToCamera": [[4 floats] x 4]},
        ...
      ],
      "fisheyeCamera": true,          # only if a kannala-brandt4 camera exists
      "gyroscope": {"updateRate", "noiseStd", "biasStd", "calibrationBias"},
      "accelerometer": {"noiseStd", "biasStd", "calibrationBias"}
    }

imuToCamera is the inverse of the stored T_imu_cam, row-major.
"""

import json
import math
from typing import Any, Dict, List, Optional

import numpy as np

from .calibration import CalibrationRecord, CameraEntry, ImuNoiseModel
from .intrinsics import DoubleSphere, IntrinsicModel, KannalaBrandt4


def pose_to_rows(T: np.ndarray) -> List[List[float]]:
    """Convert a 4x4 matrix to nested lists, rows outer."""
    return [[float(v) for v in row] for row in np.asarray(T)]


def model_to_dict(model: IntrinsicModel) -> Optional[Dict[str, Any]]:
    """Render an intrinsic model, or None if it has no output mapping."""
    if isinstance(model, KannalaBrandt4):
        return {
            'name': model.output_name,
            'focalLengthX': model.fx,
            'focalLengthY': model.fy,
            'principalPointX': model.cx,
            'principalPointY': model.cy,
            'distortionCoefficient': model.distortion,
        }
    if isinstance(model, DoubleSphere):
        return {
            'name': model.output_name,
            'focalLengthX': model.fx,
            'focalLengthY': model.fy,
            'principalPointX': model.cx,
            'principalPointY': model.cy,
            'xi': model.xi,
            'alpha': model.alpha,
        }
    return None


def camera_to_dict(camera: CameraEntry) -> Dict[str, Any]:
    models = []
    model_json = model_to_dict(camera.intrinsics)
    if model_json is not None:
        models.append(model_json)

    return {
        'models': models,
        'vignette': camera.vignette.values(),
        'imuToCamera': pose_to_rows(camera.T_imu_cam.inverse().matrix()),
    }


def imu_to_dict(imu: ImuNoiseModel, include_rate: bool = False) -> Dict[str, Any]:
    block = {}
    if include_rate:
        block['updateRate'] = float(imu.update_rate)
    block['noiseStd'] = list(imu.noise_std)
    block['biasStd'] = list(imu.bias_std)
    block['calibrationBias'] = list(imu.calibration_bias)
    return block


def map_calibration(record: CalibrationRecord) -> Dict[str, Any]:
    """
    Translate a calibration record into the output document.

    Args:
        record: Loaded calibration

    Returns:
        JSON-serializable dict
    """
    document: Dict[str, Any] = {
        'cameras': [camera_to_dict(cam) for cam in record.cameras],
    }
    if record.has_fisheye:
        document['fisheyeCamera'] = True

    # The update rate is shared by the whole rig and lives under gyroscope only
    document['gyroscope'] = imu_to_dict(record.gyroscope, include_rate=True)
    document['accelerometer'] = imu_to_dict(record.accelerometer)
    return document


def _finite_or_null(value: Any) -> Any:
    """Replace NaN / inf with None so the output stays valid JSON."""
    if isinstance(value, dict):
        return {key: _finite_or_null(v) for key, v in value.items()}
    if isinstance(value, list):
        return [_finite_or_null(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def dump_document(document: Dict[str, Any]) -> str:
    """
    Serialize the output document with 4-space indentation.

    Non-finite numbers are written as null.
    """
    return json.dumps(_finite_or_null(document), indent=4, allow_nan=False) + '\n'
