"""
Camera Intrinsic Models
=======================

Typed representations of the camera projection families that can be
exported. Basalt stores each camera as a ``camera_type`` tag plus a
parameter vector; ``classify_intrinsics`` turns that pair into one of:

- KannalaBrandt4 ('kb4'): fx, fy, cx, cy, k1, k2, k3, k4
- DoubleSphere   ('ds'):  fx, fy, cx, cy, xi, alpha
- UnsupportedModel:       any other family (pinhole, eucm, fov, ...)

Unsupported models are carried through so the caller can skip them.
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import ModelIntegrityError


# Canonical parameter order of every Basalt camera family
PARAM_NAMES: Dict[str, Tuple[str, ...]] = {
    'kb4': ('fx', 'fy', 'cx', 'cy', 'k1', 'k2', 'k3', 'k4'),
    'ds': ('fx', 'fy', 'cx', 'cy', 'xi', 'alpha'),
    'pinhole': ('fx', 'fy', 'cx', 'cy'),
    'eucm': ('fx', 'fy', 'cx', 'cy', 'alpha', 'beta'),
    'fov': ('fx', 'fy', 'cx', 'cy', 'w'),
    'bal': ('f', 'k1', 'k2'),
}


@dataclass(frozen=True)
class KannalaBrandt4:
    """Kannala-Brandt fisheye model with four distortion coefficients."""
    fx: float
    fy: float
    cx: float
    cy: float
    k1: float
    k2: float
    k3: float
    k4: float

    tag = 'kb4'
    output_name = 'kannala-brandt4'

    @property
    def params(self) -> List[float]:
        return [getattr(self, f.name) for f in fields(self)]

    @property
    def distortion(self) -> List[float]:
        """Distortion coefficients k1..k4."""
        return [self.k1, self.k2, self.k3, self.k4]


@dataclass(frozen=True)
class DoubleSphere:
    """Double sphere wide-angle model."""
    fx: float
    fy: float
    cx: float
    cy: float
    xi: float
    alpha: float

    tag = 'ds'
    output_name = 'doublesphere'

    @property
    def params(self) -> List[float]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class UnsupportedModel:
    """Any camera family with no output mapping."""
    tag: str
    params: Tuple[float, ...] = ()

    output_name = None


IntrinsicModel = Union[KannalaBrandt4, DoubleSphere, UnsupportedModel]

SUPPORTED_MODELS = {
    KannalaBrandt4.tag: KannalaBrandt4,
    DoubleSphere.tag: DoubleSphere,
}


def param_names(tag: str) -> Optional[Tuple[str, ...]]:
    """Canonical parameter names for a Basalt camera type, or None if unknown."""
    return PARAM_NAMES.get(tag)


def classify_intrinsics(tag: str, params: Sequence[float]) -> IntrinsicModel:
    """
    Classify a raw (tag, parameter vector) pair into a typed model.

    Args:
        tag: Basalt camera_type string
        params: Parameter vector in canonical order

    Returns:
        KannalaBrandt4, DoubleSphere or UnsupportedModel

    Raises:
        ModelIntegrityError: if a supported tag has the wrong parameter count
    """
    values = tuple(float(p) for p in params)

    model_cls = SUPPORTED_MODELS.get(tag)
    if model_cls is None:
        return UnsupportedModel(tag=tag, params=values)

    expected = len(fields(model_cls))
    if len(values) != expected:
        raise ModelIntegrityError(tag, expected, len(values))

    return model_cls(*values)


def is_fisheye(model: IntrinsicModel) -> bool:
    return isinstance(model, KannalaBrandt4)
