"""
Shared fixtures: sample Basalt calibration documents.
"""

import json

import numpy as np
import pytest


IDENTITY_POSE = {'px': 0.0, 'py': 0.0, 'pz': 0.0,
                 'qx': 0.0, 'qy': 0.0, 'qz': 0.0, 'qw': 1.0}

DS_PARAMS = [500.0, 500.0, 320.0, 240.0, -0.2, 0.6]
KB4_PARAMS = [300.0, 300.0, 160.0, 120.0, 0.1, 0.01, 0.001, 0.0001]

GYRO_BIAS = [0.001, -0.002, 0.003] + np.eye(3).flatten().tolist()
ACCEL_BIAS = [0.01, 0.02, -0.03, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]


def ds_intrinsics(params=DS_PARAMS):
    return {
        'camera_type': 'ds',
        'intrinsics': dict(zip(['fx', 'fy', 'cx', 'cy', 'xi', 'alpha'], params)),
    }


def kb4_intrinsics(params=KB4_PARAMS):
    return {
        'camera_type': 'kb4',
        'intrinsics': dict(zip(['fx', 'fy', 'cx', 'cy', 'k1', 'k2', 'k3', 'k4'], params)),
    }


def vignette_spline(knots):
    return {'value0': 0, 'value1': 10000000000, 'value2': [[k] for k in knots]}


def make_calib(poses, intrinsics, vignettes=None, **overrides):
    """Build a Basalt calibration document (with the value0 wrapper)."""
    calib = {
        'T_imu_cam': poses,
        'intrinsics': intrinsics,
        'resolution': [[640, 480]] * len(intrinsics),
        'calib_accel_bias': ACCEL_BIAS,
        'calib_gyro_bias': GYRO_BIAS,
        'imu_update_rate': 200.0,
        'accel_noise_std': [0.01, 0.01, 0.01],
        'gyro_noise_std': [0.01, 0.01, 0.01],
        'accel_bias_std': [0.001, 0.001, 0.001],
        'gyro_bias_std': [0.0001, 0.0001, 0.0001],
        'cam_time_offset_ns': 0,
    }
    if vignettes is not None:
        calib['vignette'] = vignettes
    calib.update(overrides)
    return {'value0': calib}


@pytest.fixture
def stereo_calib():
    """Camera 0: double sphere, identity; camera 1: KB4, translated 0.1 along z."""
    pose1 = dict(IDENTITY_POSE, pz=0.1)
    return make_calib(
        poses=[IDENTITY_POSE, pose1],
        intrinsics=[ds_intrinsics(), kb4_intrinsics()],
        vignettes=[vignette_spline([1.0, 0.95, 0.8]),
                   vignette_spline([1.0, 0.9, 0.7, 0.5])],
    )


@pytest.fixture
def stereo_calib_file(tmp_path, stereo_calib):
    filepath = tmp_path / 'calibration.json'
    with open(filepath, 'w') as f:
        json.dump(stereo_calib, f, indent=4)
    return filepath
