import random

import pytest

from gaze_heatmap.core import GazeEstimator, TemporalSmoother
from gaze_heatmap.models import RayHit, ScreenPoint, Vector3

from conftest import hit_for


@pytest.fixture
def estimator(converter) -> GazeEstimator:
    return GazeEstimator(converter, TemporalSmoother(window_size=10))


def test_hits_are_averaged_before_projection(device, estimator):
    left = hit_for(device, 100.0, 400.0)
    right = hit_for(device, 200.0, 500.0)

    point = estimator.estimate(left, right)
    assert point.x == pytest.approx(150.0)
    assert point.y == pytest.approx(450.0)


@pytest.mark.parametrize("missing", ["left", "right", "both"])
def test_missing_hit_emits_nothing_and_keeps_window(device, estimator, missing):
    hit = hit_for(device, 100.0, 100.0)
    estimator.estimate(hit, hit)

    left = None if missing in ("left", "both") else hit
    right = None if missing in ("right", "both") else hit
    assert estimator.estimate(left, right) is None
    assert len(estimator.smoother) == 1


def test_out_of_bounds_is_clamped_before_smoothing(device, estimator):
    inside = hit_for(device, 100.0, 100.0)
    far_right = hit_for(device, 10_000.0, 100.0)

    estimator.estimate(inside, inside)
    point = estimator.estimate(far_right, far_right)

    assert estimator.last_raw.x == 374.0
    assert estimator.last_raw.y == pytest.approx(100.0)
    assert point.x == pytest.approx((100.0 + 374.0) / 2)


def test_clamp_holds_for_any_raw_projection(estimator):
    rng = random.Random(7)
    for _ in range(500):
        left = RayHit(Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)))
        right = RayHit(Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)))
        raw = estimator.project(left, right)
        assert 0.0 <= raw.x <= 374.0
        assert 0.0 <= raw.y <= 811.0


def test_negative_projection_clamps_to_origin(device, estimator):
    hit = hit_for(device, -50.0, -50.0)
    assert estimator.estimate(hit, hit) == ScreenPoint(0.0, 0.0)


def test_reset_clears_window(device, estimator):
    hit = hit_for(device, 50.0, 50.0)
    estimator.estimate(hit, hit)
    estimator.reset()

    assert len(estimator.smoother) == 0
    assert estimator.last_raw is None


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
@pytest.mark.parametrize("axis", ["x", "y"])
@pytest.mark.parametrize("eye", ["left", "right"])
def test_non_finite_hit_is_skipped_without_touching_window(device, estimator, bad, axis, eye):
    good = hit_for(device, 100.0, 200.0)
    first = estimator.estimate(good, good)

    coords = {"x": good.local_coordinates.x, "y": good.local_coordinates.y}
    coords[axis] = bad
    broken = RayHit(Vector3(coords["x"], coords["y"], 0.0))
    left, right = (broken, good) if eye == "left" else (good, broken)

    assert estimator.estimate(left, right) is None
    assert len(estimator.smoother) == 1
    assert estimator.last_raw == first

    # The next valid frame averages only finite points
    point = estimator.estimate(good, good)
    assert point.x == pytest.approx(100.0)
    assert point.y == pytest.approx(200.0)


def test_huge_finite_hit_is_clamped(estimator):
    hit = RayHit(Vector3(1e300, -1e300, 0.0))
    point = estimator.estimate(hit, hit)
    assert point == ScreenPoint(374.0, 811.0)
