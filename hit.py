"""
Defines the Hit record and the HitType tag for detector energy deposits.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np

# Value stored in a coordinate that the readout did not measure
UNDETERMINED = math.nan


class HitType(IntEnum):
    """
    Which coordinates of a hit are measured.

    Values are products of one prime per axis (X=2, Y=3, Z=5), so a hit of
    type T is usable in projection P whenever T % P == 0. An XYZ hit is
    therefore usable in every projection.
    """
    X = 2
    Y = 3
    Z = 5
    XY = 6
    XZ = 10
    YZ = 15
    XYZ = 30

    def satisfies(self, projection: "HitType") -> bool:
        return self.value % int(projection) == 0

    @property
    def valid_axes(self) -> str:
        return "".join(a for a, t in (("x", HitType.X), ("y", HitType.Y), ("z", HitType.Z))
                       if self.satisfies(t))


@dataclass(frozen=True)
class Hit:
    """
    Represents a single energy deposit recorded in the detector.

    Attributes:
        x, y, z (float): position of the deposit (mm by convention);
                         unmeasured coordinates hold UNDETERMINED
        energy (float): deposited energy (keV by convention)
        time (float): time offset of the deposit (us by convention)
        type (HitType): which of x, y, z are measured
    """
    x: float
    y: float
    z: float
    energy: float
    time: float = 0.0
    type: HitType = HitType.XYZ


def hit_arrays(hits: Iterable[Hit]) -> Tuple[np.ndarray, np.ndarray]:
    """Positions (N, 3) and energies (N,) of an iterable of hits."""
    hits = list(hits)
    if not hits:
        return np.empty((0, 3)), np.empty(0)
    positions = np.array([[h.x, h.y, h.z] for h in hits], float)
    energies = np.array([h.energy for h in hits], float)
    return positions, energies
