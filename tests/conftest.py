import math
import pytest

from hit import Hit, HitType, UNDETERMINED
from hits_event import HitsEvent
from volumes import Cylinder, Prism


@pytest.fixture
def cylinder():
    return Cylinder(x0=(0, 0, 0), x1=(0, 0, 10), radius=5.0)


@pytest.fixture
def prism():
    return Prism(x0=(0, 0, 0), x1=(0, 0, 4), size_x=2.0, size_y=2.0, theta=0.0)


@pytest.fixture
def mixed_hits():
    return [
        Hit(0.0, 0.0, 5.0, 2.0),
        Hit(10.0, 0.0, 5.0, 3.0),
        Hit(3.0, 3.0, 1.0, 1.5, 4.0),
        Hit(1.0, -1.0, 12.0, 7.0),
        Hit(0.5, UNDETERMINED, 5.0, 4.0, 1.0, HitType.XZ),
        Hit(0.2, 0.1, 9.5, 0.5),
    ]


@pytest.fixture
def event(mixed_hits):
    ev = HitsEvent(event_id=7)
    for h in mixed_hits:
        ev.add_hit(h.x, h.y, h.z, h.energy, h.time, h.type)
    return ev


@pytest.fixture
def rotated_points():
    """Local (u, v) offsets in the cross-section and the rotation angle."""
    theta = math.pi / 5
    offsets = [(0.3, 0.4), (0.9, -0.8), (1.3, 0.0), (0.0, 1.2), (-0.95, 0.95), (-0.2, -1.1)]
    return theta, offsets
