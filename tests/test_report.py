import math
import pandas as pd
import pytest

from report import summarize_volumes


def test_summary_has_one_row_per_volume(event, cylinder, prism):
    data = summarize_volumes(event, {"cyl": cylinder, "box": prism})

    assert isinstance(data, pd.DataFrame)
    assert list(data.index) == ["cyl", "box"]
    assert data.index.name == "volume"
    assert list(data.columns) == [
        "shape", "n_inside", "any_inside", "all_inside", "energy",
        "mean_x", "mean_y", "mean_z", "dist_wall", "dist_top", "dist_bottom",
    ]


def test_summary_values(event, cylinder, prism):
    data = summarize_volumes(event, {"cyl": cylinder, "box": prism})

    cyl = data.loc["cyl"]
    assert cyl["shape"] == "cylinder"
    assert cyl["n_inside"] == 3
    assert bool(cyl["any_inside"])
    assert not bool(cyl["all_inside"])
    assert cyl["energy"] == pytest.approx(4.0)
    assert cyl["mean_z"] == pytest.approx(15.5 / 3)
    assert cyl["dist_wall"] == pytest.approx(math.sqrt(7.0))
    assert cyl["dist_top"] == pytest.approx(0.5)
    assert cyl["dist_bottom"] == pytest.approx(1.0)

    box = data.loc["box"]
    assert box["shape"] == "prism"
    assert box["n_inside"] == 0
    assert box["energy"] == 0.0
    assert math.isnan(box["mean_x"])
    assert math.isnan(box["dist_wall"])
    assert math.isnan(box["dist_top"])
    assert math.isnan(box["dist_bottom"])
