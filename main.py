# main.py
import numpy as np
import pandas as pd

from hit import HitType, UNDETERMINED
from hits_event import HitsEvent
from report import summarize_volumes
from volumes import Cylinder, Prism

seed = 42
num_events = 3
avg_hits = 40
avg_projected_hits = 10     # XZ / YZ hits per event
half_size = 60.0            # mm, hits are spread in a cube of this half side
mean_energy = 5.0           # keV
drift_window = 20.0         # us

# Volumes
volumes = {
    "fiducial_cylinder": Cylinder(x0=(0, 0, -50), x1=(0, 0, 50), radius=40.0),
    "tilted_cylinder": Cylinder(x0=(-30, -30, -30), x1=(30, 30, 30), radius=15.0),
    "readout_prism": Prism(x0=(0, 0, -50), x1=(0, 0, 50), size_x=60.0, size_y=40.0, theta=np.pi / 6),
}


def generate_event(event_id: int, rng: np.random.Generator) -> HitsEvent:
    """
    Toy event: XYZ hits uniform in a cube plus XZ / YZ projected hits.
    """
    event = HitsEvent(event_id)

    for _ in range(rng.poisson(avg_hits)):
        x, y, z = rng.uniform(-half_size, half_size, size=3)
        event.add_hit(x, y, z, rng.exponential(mean_energy), rng.uniform(0, drift_window))

    for _ in range(rng.poisson(avg_projected_hits)):
        a, z = rng.uniform(-half_size, half_size, size=2)
        energy = rng.exponential(mean_energy)
        t = rng.uniform(0, drift_window)
        if rng.uniform() < 0.5:
            event.add_hit(a, UNDETERMINED, z, energy, t, HitType.XZ)
        else:
            event.add_hit(UNDETERMINED, a, z, energy, t, HitType.YZ)

    event.sort()
    return event


if __name__ == "__main__":
    rng = np.random.default_rng(seed)
    pd.set_option("display.width", 160)

    print("Starting volume queries...")

    for event_id in range(num_events):
        event = generate_event(event_id, rng)
        event.print_event(n_hits=5)
        print(f"[HITS-EVENT] XZ hits: {len(event.get_xz_hits())}  "
              f"YZ hits: {len(event.get_yz_hits())}  "
              f"XYZ hits: {len(event.get_xyz_hits())}")

        # Projected hits have a NaN coordinate and never count as contained
        summary = summarize_volumes(event.get_xyz_hits(), volumes)
        print(summary.round(3))
        print()

    print("Volume queries complete.")
