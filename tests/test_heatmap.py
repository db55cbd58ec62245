import numpy as np
import pytest

from gaze_heatmap.core import HeatmapAccumulator


@pytest.fixture
def heatmap() -> HeatmapAccumulator:
    return HeatmapAccumulator(width=300, height=300, radius=46, max_increment=25)


def test_single_accumulate_scenario(heatmap):
    heatmap.accumulate(100, 100)

    assert heatmap.value_at(100, 100) == 25
    assert heatmap.value_at(146, 100) == 0
    assert heatmap.value_at(123, 100) == 13
    assert heatmap.value_at(100, 123) == 13


def test_grid_is_indexed_row_major(heatmap):
    heatmap.accumulate(50, 200)
    assert heatmap.grid[200, 50] == 25
    assert heatmap.grid[50, 200] == 0


def test_only_cells_inside_disc_change(heatmap):
    heatmap.accumulate(150, 150)

    ys, xs = np.nonzero(heatmap.grid)
    distances = np.hypot(xs - 150, ys - 150)
    assert distances.max() < 46


def test_repeated_accumulate_saturates_and_never_wraps(heatmap):
    # Enough passes for cells with an increment of 1
    for _ in range(260):
        heatmap.accumulate(150, 150)

    grid = heatmap.grid
    assert grid.dtype == np.uint8
    assert grid.max() == 255

    offsets = np.arange(300)
    xs, ys = np.meshgrid(offsets, offsets)
    distances = np.hypot(xs - 150, ys - 150)

    # Cells that receive a non-zero increment all end up saturated
    increments = np.floor((1 - distances / 46) * 25 + 0.5)
    positive = (distances < 46) & (increments > 0)
    assert np.all(grid[positive] == 255)
    assert np.all(grid[distances >= 46] == 0)


def test_saturating_add_clamps_last_step(heatmap):
    for _ in range(10):
        heatmap.accumulate(150, 150)
    assert heatmap.value_at(150, 150) == 250

    heatmap.accumulate(150, 150)
    assert heatmap.value_at(150, 150) == 255


def test_increment_is_monotone_in_proximity(heatmap):
    previous = heatmap.increment_at(0, 0)
    for d in range(1, 46):
        current = heatmap.increment_at(d, 0)
        assert current <= previous
        previous = current

    assert heatmap.increment_at(46, 0) == 0
    assert heatmap.increment_at(100, 0) == 0


def test_disc_is_clipped_at_grid_edges(heatmap):
    heatmap.accumulate(0, 0)
    assert heatmap.value_at(0, 0) == 25
    assert heatmap.value_at(299, 299) == 0

    heatmap.accumulate(299, 299)
    assert heatmap.value_at(299, 299) == 25


def test_center_outside_grid_is_silently_skipped(heatmap):
    heatmap.accumulate(-200, -200)
    heatmap.accumulate(1000, 50)
    assert not heatmap.grid.any()


def test_center_just_outside_grid_touches_edge(heatmap):
    heatmap.accumulate(-10, 100)
    assert heatmap.value_at(0, 100) == round((1 - 10 / 46) * 25)


def test_snapshot_is_a_copy(heatmap):
    heatmap.accumulate(100, 100)
    snap = heatmap.snapshot()
    heatmap.accumulate(100, 100)

    assert snap[100, 100] == 25
    assert heatmap.value_at(100, 100) == 50


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=10),
        dict(width=10, height=10, radius=0),
        dict(width=10, height=10, max_increment=0),
        dict(width=10, height=10, max_increment=256),
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        HeatmapAccumulator(**kwargs)
