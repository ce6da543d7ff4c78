# volumes.py
from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

Vec3 = Tuple[float, float, float]


class InvalidVolumeError(ValueError):
    """Raised when a volume descriptor does not describe a finite solid."""


def _as_vec3(name: str, value: Sequence[float]) -> Vec3:
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise InvalidVolumeError(f"{name} must have 3 components, got {arr.shape[0]}")
    if not np.all(np.isfinite(arr)):
        raise InvalidVolumeError(f"{name} must be finite, got {tuple(arr)}")
    return float(arr[0]), float(arr[1]), float(arr[2])


def _positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidVolumeError(f"{name} must be a positive finite number, got {value}")
    return value


def _check_axis(x0: Vec3, x1: Vec3) -> None:
    # the norm can underflow to 0 or overflow to inf even for distinct finite ends
    with np.errstate(over="ignore", under="ignore"):
        length = float(np.linalg.norm(np.subtract(x1, x0)))
    if not (math.isfinite(length) and length > 0):
        raise InvalidVolumeError(f"axis from {x0} to {x1} has no usable length ({length})")


class _Axial:
    """Axis helpers shared by both volume shapes (end centres x0 -> x1)."""

    x0: Vec3
    x1: Vec3

    @property
    def origin(self) -> np.ndarray:
        return np.array(self.x0)

    @property
    def axis(self) -> np.ndarray:
        return np.array(self.x1) - np.array(self.x0)

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.axis))

    @property
    def unit_axis(self) -> np.ndarray:
        return self.axis / self.length


# =====================================================================
#                              Cylinder
# =====================================================================

@dataclass(frozen=True)
class Cylinder(_Axial):
    """
    Finite right cylinder.

    Attributes:
        x0     : centre of the bottom face
        x1     : centre of the top face
        radius : radius of the circular cross-section
    """
    x0: Vec3
    x1: Vec3
    radius: float

    def __post_init__(self):
        object.__setattr__(self, "x0", _as_vec3("x0", self.x0))
        object.__setattr__(self, "x1", _as_vec3("x1", self.x1))
        object.__setattr__(self, "radius", _positive("radius", self.radius))
        _check_axis(self.x0, self.x1)


# =====================================================================
#                               Prism
# =====================================================================

@dataclass(frozen=True)
class Prism(_Axial):
    """
    Finite rectangular prism with a cross-section rotated about its axis.

    Attributes:
        x0, x1 : centres of the bottom and top faces
        size_x : side of the cross-section along the local u direction
        size_y : side of the cross-section along the local v direction
        theta  : rotation of the cross-section about the axis (radians)
    """
    x0: Vec3
    x1: Vec3
    size_x: float
    size_y: float
    theta: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x0", _as_vec3("x0", self.x0))
        object.__setattr__(self, "x1", _as_vec3("x1", self.x1))
        object.__setattr__(self, "size_x", _positive("size_x", self.size_x))
        object.__setattr__(self, "size_y", _positive("size_y", self.size_y))
        theta = float(self.theta)
        if not math.isfinite(theta):
            raise InvalidVolumeError(f"theta must be finite, got {theta}")
        object.__setattr__(self, "theta", theta)
        _check_axis(self.x0, self.x1)

    def cross_section_axes(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Unit vectors (u', v') spanning the rotated cross-section.

        The unrotated u is global X projected onto the plane orthogonal to
        the axis (global Y when the axis is parallel to X) and v = axis x u,
        so an axis along +Z gives the global (X, Y) frame at theta = 0.
        """
        w = self.unit_axis
        ref = np.array([1.0, 0.0, 0.0])
        if abs(w @ ref) > 1.0 - 1e-9:
            ref = np.array([0.0, 1.0, 0.0])
        u = ref - (ref @ w) * w
        u /= np.linalg.norm(u)
        v = np.cross(w, u)

        c, s = math.cos(self.theta), math.sin(self.theta)
        return c * u + s * v, -s * u + c * v


Volume = Union[Cylinder, Prism]
