# hits_event.py
import math
import numpy as np
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from hit import Hit, HitType, hit_arrays
import volume_query
from volumes import Volume

# Returned by the closest-distance accessors when no hit is inside the volume
NO_HIT_DISTANCE = -1.0


class HitsEvent:
    """
    A single detector event: an ordered collection of energy deposits.

    Iteration order is the insertion order (or the order left by sort()).
    Volume queries do not depend on that order.

    Attributes:
        id    : event identifier
        hits  : list of Hit objects in this event
    """
    def __init__(self, event_id: int = 0, hits: Optional[Sequence[Hit]] = None):
        self.id = event_id
        self.hits: List[Hit] = list(hits) if hits is not None else []

    def clear(self):
        """
        Remove all hits, so the object can be reused for the next event.
        """
        self.hits = []

    def add_hit(self, x: float, y: float, z: float, energy: float, time: float = 0.0,
                type: HitType = HitType.XYZ) -> Hit:
        hit = Hit(float(x), float(y), float(z), float(energy), float(time), HitType(type))
        self.hits.append(hit)
        return hit

    def add_hit_at(self, position: Sequence[float], energy: float, time: float = 0.0,
                   type: HitType = HitType.XYZ) -> Hit:
        x, y, z = position
        return self.add_hit(x, y, z, energy, time, type)

    # ---------------------------------------------------------
    # Read interface
    # ---------------------------------------------------------
    def __len__(self) -> int:
        return len(self.hits)

    def __iter__(self) -> Iterator[Hit]:
        return iter(self.hits)

    def get_number_of_hits(self) -> int:
        return len(self.hits)

    def get_hit(self, n: int) -> Hit:
        if not 0 <= n < len(self.hits):
            raise IndexError(f"hit index {n} out of range for event with {len(self.hits)} hits")
        return self.hits[n]

    def positions(self) -> np.ndarray:
        """(N, 3) array of hit positions."""
        return hit_arrays(self.hits)[0]

    def energies(self) -> np.ndarray:
        return hit_arrays(self.hits)[1]

    # ---------------------------------------------------------
    # Projection views
    # ---------------------------------------------------------
    def _with_type(self, hit_type: HitType) -> "HitsEvent":
        return HitsEvent(self.id, [h for h in self.hits if h.type == hit_type])

    def get_xz_hits(self) -> "HitsEvent":
        """Hits measured in X and Z only (Y undetermined)."""
        return self._with_type(HitType.XZ)

    def get_yz_hits(self) -> "HitsEvent":
        """Hits measured in Y and Z only (X undetermined)."""
        return self._with_type(HitType.YZ)

    def get_xyz_hits(self) -> "HitsEvent":
        return self._with_type(HitType.XYZ)

    def hits_compatible_with(self, projection: HitType) -> "HitsEvent":
        """
        Hits usable in the given projection, e.g. XYZ and XZ hits for XZ.
        """
        return HitsEvent(self.id, [h for h in self.hits if h.type.satisfies(projection)])

    def number_of_hits_x(self) -> int:
        return sum(1 for h in self.hits if h.type.satisfies(HitType.X))

    def number_of_hits_y(self) -> int:
        return sum(1 for h in self.hits if h.type.satisfies(HitType.Y))

    # ---------------------------------------------------------
    # Whole-event quantities
    # ---------------------------------------------------------
    def total_energy(self) -> float:
        return float(self.energies().sum())

    def mean_position(self) -> np.ndarray:
        """
        Energy-weighted mean position of the event.

        Undetermined coordinates are left out of the average of their axis.
        An axis with no measured coordinate (or zero energy) gives 0.
        """
        pos = self.positions()
        w = np.broadcast_to(self.energies()[:, None], pos.shape)
        measured = np.isfinite(pos)
        weight = np.where(measured, w, 0.0).sum(axis=0)
        total = np.where(measured, pos * w, 0.0).sum(axis=0)
        return np.divide(total, weight, out=np.zeros(3), where=weight != 0)

    def boundaries(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Per-axis (min, max) of the measured coordinates.
        Axes without any measured coordinate give NaN.
        """
        pos = self.positions()
        lo = np.full(3, np.nan)
        hi = np.full(3, np.nan)
        for axis in range(3):
            col = pos[:, axis]
            col = col[np.isfinite(col)]
            if col.size:
                lo[axis], hi[axis] = col.min(), col.max()
        return lo, hi

    def sort(self, key: Optional[Callable[[Hit], float]] = None):
        """
        Reorder the hits in place; by default from smaller to greater z,
        with undetermined z (X, Y and XY hits) placed last.
        """
        self.hits.sort(key=key if key is not None else (lambda h: (math.isnan(h.z), h.z)))

    # ---------------------------------------------------------
    # Volume queries
    # ---------------------------------------------------------
    def any_hit_inside(self, volume: Volume) -> bool:
        return volume_query.any_inside(volume, self.hits)

    def all_hits_inside(self, volume: Volume) -> bool:
        return volume_query.all_inside(volume, self.hits)

    def number_of_hits_inside(self, volume: Volume) -> int:
        return volume_query.count_inside(volume, self.hits)

    def energy_inside(self, volume: Volume) -> float:
        return volume_query.energy_inside(volume, self.hits)

    def mean_position_inside(self, volume: Volume) -> np.ndarray:
        return volume_query.mean_position_inside(volume, self.hits)

    def closest_hit_inside_distance_to_wall(self, volume: Volume) -> float:
        """
        Distance from the closest contained hit to the lateral wall,
        or NO_HIT_DISTANCE when no hit is inside.
        """
        d = volume_query.closest_distance_to_wall(volume, self.hits)
        return NO_HIT_DISTANCE if d is None else d

    def closest_hit_inside_distance_to_top(self, volume: Volume) -> float:
        d = volume_query.closest_distance_to_top(volume, self.hits)
        return NO_HIT_DISTANCE if d is None else d

    def closest_hit_inside_distance_to_bottom(self, volume: Volume) -> float:
        d = volume_query.closest_distance_to_bottom(volume, self.hits)
        return NO_HIT_DISTANCE if d is None else d

    # ---------------------------------------------------------
    # Console summary
    # ---------------------------------------------------------
    def print_event(self, n_hits: Optional[int] = None):
        mx, my, mz = self.mean_position()
        print(f"[HITS-EVENT] Event ID : {self.id}")
        print(f"[HITS-EVENT] Total energy : {self.total_energy():.4f}")
        print(f"[HITS-EVENT] Mean position : ( {mx:.4f} , {my:.4f} , {mz:.4f} )")
        print(f"[HITS-EVENT] Number of hits : {len(self.hits)}")

        shown = self.hits
        if n_hits is not None:
            print(f"[HITS-EVENT] Printing only the first {n_hits} hits")
            shown = self.hits[:n_hits]
        for n, h in enumerate(shown):
            print(f"  Hit {n}: X: {h.x:.4f} Y: {h.y:.4f} Z: {h.z:.4f} "
                  f"Energy: {h.energy:.4f} Time: {h.time:.4f} Type: {h.type.name}")
