"""
Rigid camera-to-IMU extrinsics.
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np
from scipy.spatial.transform import Rotation


@dataclass(frozen=True)
class Pose3D:
    """Rigid transform (rotation + translation)."""
    rotation: np.ndarray     # 3x3, assumed orthonormal
    translation: np.ndarray  # (3,)

    @classmethod
    def from_basalt(cls, pose: Dict[str, float]) -> 'Pose3D':
        """Parse a Basalt pose {px, py, pz, qx, qy, qz, qw}."""
        quat = [pose['qx'], pose['qy'], pose['qz'], pose['qw']]  # [x, y, z, w]
        R = Rotation.from_quat(quat).as_matrix()
        t = np.array([pose['px'], pose['py'], pose['pz']], dtype=np.float64)
        return cls(rotation=R, translation=t)

    @classmethod
    def from_matrix(cls, T: np.ndarray) -> 'Pose3D':
        T = np.asarray(T, dtype=np.float64).reshape(4, 4)
        return cls(rotation=T[:3, :3].copy(), translation=T[:3, 3].copy())

    @classmethod
    def identity(cls) -> 'Pose3D':
        return cls(rotation=np.eye(3), translation=np.zeros(3))

    def matrix(self) -> np.ndarray:
        """4x4 homogeneous transformation matrix."""
        T = np.eye(4)
        T[:3, :3] = self.rotation
        T[:3, 3] = self.translation
        return T

    def inverse(self) -> 'Pose3D':
        """Return inverse transformation."""
        R_inv = self.rotation.T
        return Pose3D(rotation=R_inv, translation=-R_inv @ self.translation)

    def to_basalt(self) -> Dict[str, float]:
        """Convert to Basalt pose dict (quaternion x, y, z, w)."""
        quat = Rotation.from_matrix(self.rotation).as_quat()
        return {
            'px': float(self.translation[0]),
            'py': float(self.translation[1]),
            'pz': float(self.translation[2]),
            'qx': float(quat[0]),
            'qy': float(quat[1]),
            'qz': float(quat[2]),
            'qw': float(quat[3]),
        }
