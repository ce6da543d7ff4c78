import numpy as np
import pandas as pd
from typing import Dict, Iterable

import volume_query as vq
from hit import Hit
from volumes import Volume


def summarize_volumes(hits: Iterable[Hit], volumes: Dict[str, Volume]) -> pd.DataFrame:
    """
    Tabulate the volume queries for one set of hits against several volumes.

    Parameters
    ----------
    hits : iterable of Hit
        Hits of one event (a HitsEvent works as well).
    volumes : dict
        Volume name -> Cylinder or Prism.

    Returns
    -------
    data : pd.DataFrame
        One row per volume, indexed by name:
            shape | n_inside | any_inside | all_inside | energy |
            mean_x | mean_y | mean_z | dist_wall | dist_top | dist_bottom
        Distances are NaN when no hit is inside the volume.
    """
    hits = list(hits)

    names, shapes, counts, anys, alls, energies = [], [], [], [], [], []
    means, walls, tops, bottoms = [], [], [], []

    for name, volume in volumes.items():
        n = vq.count_inside(volume, hits)

        names.append(name)
        shapes.append(type(volume).__name__.lower())
        counts.append(n)
        anys.append(n > 0)
        alls.append(n > 0 and n == len(hits))
        energies.append(vq.energy_inside(volume, hits))
        means.append(vq.mean_position_inside(volume, hits) if n else np.full(3, np.nan))

        for column, query in ((walls, vq.closest_distance_to_wall),
                              (tops, vq.closest_distance_to_top),
                              (bottoms, vq.closest_distance_to_bottom)):
            d = query(volume, hits)
            column.append(np.nan if d is None else d)

    means = np.array(means, float).reshape(-1, 3)

    data = pd.DataFrame({
        "volume": names,
        "shape": shapes,
        "n_inside": counts,
        "any_inside": anys,
        "all_inside": alls,
        "energy": energies,
        "mean_x": means[:, 0],
        "mean_y": means[:, 1],
        "mean_z": means[:, 2],
        "dist_wall": walls,
        "dist_top": tops,
        "dist_bottom": bottoms,
    })
    data.set_index("volume", inplace=True)

    return data
