# ---------------------------------------------------------------------
# volume_query.py
# Containment of hits in cylinders / rotated prisms and the aggregate
# statistics over the contained subset
# ---------------------------------------------------------------------

from __future__ import annotations
import numpy as np
from typing import Iterable, Optional, Sequence, Tuple

from hit import Hit, hit_arrays
from volumes import Cylinder, Prism, Volume

# =====================================================================
#                         Per-hit geometry
# =====================================================================

def _axial(volume: Volume, positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Displacements d = P - x0 and their signed distance l along the axis.
    """
    d = positions - volume.origin
    l = d @ volume.axis / volume.length
    return d, l


def _cross_section(volume: Prism, d: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    u_axis, v_axis = volume.cross_section_axes()
    return d @ u_axis, d @ v_axis


def _mask(volume: Volume, positions: np.ndarray) -> np.ndarray:
    if not isinstance(volume, (Cylinder, Prism)):
        raise TypeError(f"expected a Cylinder or Prism, got {type(volume).__name__}")

    d, l = _axial(volume, positions)
    # NaN coordinates fail every comparison below, so they are never inside
    between_faces = (l >= 0) & (l <= volume.length)

    if isinstance(volume, Cylinder):
        perp2 = np.einsum("ij,ij->i", d, d) - l * l
        return between_faces & (perp2 <= volume.radius ** 2)

    u, v = _cross_section(volume, d)
    return (between_faces
            & (np.abs(u) <= volume.size_x / 2)
            & (np.abs(v) <= volume.size_y / 2))


# =====================================================================
#                         Containment
# =====================================================================

def contains_point(volume: Volume, point: Sequence[float]) -> bool:
    """
    True if the point lies inside the volume (boundaries included).
    """
    position = np.asarray(point, dtype=float).reshape(1, 3)
    return bool(_mask(volume, position)[0])


def inside_mask(volume: Volume, hits: Iterable[Hit]) -> np.ndarray:
    """Boolean array, one entry per hit, in iteration order."""
    positions, _ = hit_arrays(hits)
    return _mask(volume, positions)


def count_inside(volume: Volume, hits: Iterable[Hit]) -> int:
    return int(np.count_nonzero(inside_mask(volume, hits)))


def any_inside(volume: Volume, hits: Iterable[Hit]) -> bool:
    return bool(inside_mask(volume, hits).any())


def all_inside(volume: Volume, hits: Iterable[Hit]) -> bool:
    """
    True if every hit is inside. An empty collection gives False.
    """
    mask = inside_mask(volume, hits)
    return bool(mask.size > 0 and mask.all())


# =====================================================================
#                         Aggregates
# =====================================================================

def energy_inside(volume: Volume, hits: Iterable[Hit]) -> float:
    positions, energies = hit_arrays(hits)
    return float(energies[_mask(volume, positions)].sum())


def mean_position_inside(volume: Volume, hits: Iterable[Hit]) -> np.ndarray:
    """
    Arithmetic mean of (x, y, z) over the contained hits.

    Returns the zero vector when no hit is contained; check count_inside
    first when that case matters.
    """
    positions, _ = hit_arrays(hits)
    inside = positions[_mask(volume, positions)]
    if len(inside) == 0:
        return np.zeros(3)
    return inside.mean(axis=0)


# =====================================================================
#                         Distances to the boundary
# =====================================================================

def closest_distance_to_wall(volume: Volume, hits: Iterable[Hit]) -> Optional[float]:
    """
    Smallest lateral margin among the contained hits, None if none is inside.

    Cylinder: sqrt(radius^2 - |P - x0|^2 + l^2), i.e. the radial margin term
    evaluated per hit, minimised before the square root.
    Prism: min(size_x/2 - |u|, size_y/2 - |v|) in the rotated cross-section.
    """
    positions, _ = hit_arrays(hits)
    mask = _mask(volume, positions)
    if not mask.any():
        return None
    d, l = _axial(volume, positions[mask])

    if isinstance(volume, Cylinder):
        d2 = volume.radius ** 2 - np.einsum("ij,ij->i", d, d) + l * l
        return float(np.sqrt(max(d2.min(), 0.0)))

    u, v = _cross_section(volume, d)
    margins = np.minimum(volume.size_x / 2 - np.abs(u), volume.size_y / 2 - np.abs(v))
    return float(margins.min())


def closest_distance_to_top(volume: Volume, hits: Iterable[Hit]) -> Optional[float]:
    """Smallest L - l among the contained hits, None if none is inside."""
    positions, _ = hit_arrays(hits)
    mask = _mask(volume, positions)
    if not mask.any():
        return None
    _, l = _axial(volume, positions[mask])
    return float((volume.length - l).min())


def closest_distance_to_bottom(volume: Volume, hits: Iterable[Hit]) -> Optional[float]:
    """Smallest l among the contained hits, None if none is inside."""
    positions, _ = hit_arrays(hits)
    mask = _mask(volume, positions)
    if not mask.any():
        return None
    _, l = _axial(volume, positions[mask])
    return float(l.min())
