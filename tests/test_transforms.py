import numpy as np
import pytest

from gauss_kmeans.synthetic_data import default_group_specs, generate
from gauss_kmeans.transforms import explode_distribution, move_distribution, nudge


@pytest.fixture
def dists():
    d, _ = generate(50, default_group_specs(), random_state=0)
    return d


def test_move_translates_only_the_selected_group(dists):
    moved = move_distribution(dists, "red", 1.5, -2.0)
    np.testing.assert_allclose(moved["red"], dists["red"] + [1.5, -2.0])
    assert moved["blue"] is dists["blue"]
    assert moved is not dists


def test_move_does_not_mutate_input(dists):
    before = dists["red"].copy()
    move_distribution(dists, "red", 3, 3)
    np.testing.assert_array_equal(dists["red"], before)


@pytest.mark.parametrize("direction,delta", [
    ("up",    (0.0, -0.2)),
    ("down",  (0.0, 0.2)),
    ("left",  (-0.2, 0.0)),
    ("right", (0.2, 0.0)),
])
def test_nudge_uses_screen_directions(dists, direction, delta):
    moved = nudge(dists, "blue", direction)
    np.testing.assert_allclose(moved["blue"] - dists["blue"], np.tile(delta, (50, 1)))


def test_nudge_and_move_reject_unknown_input(dists):
    with pytest.raises(ValueError):
        nudge(dists, "blue", "diagonal")
    with pytest.raises(KeyError):
        move_distribution(dists, "green", 1, 1)
    with pytest.raises(KeyError):
        explode_distribution(dists, "green")


@pytest.mark.parametrize("seed", range(5))
def test_explode_keeps_point_count_and_other_groups(dists, seed):
    exploded = explode_distribution(dists, "orange", random_state=seed)
    assert exploded["orange"].shape == dists["orange"].shape
    assert exploded["blue"] is dists["blue"]
    assert exploded["red"] is dists["red"]
    assert not np.allclose(exploded["orange"], dists["orange"])


def test_explode_lands_near_the_expanded_bounds(dists):
    exploded = explode_distribution(dists, "orange", random_state=3)
    all_pts = np.vstack(list(dists.values()))
    span = all_pts.max(axis=0) - all_pts.min(axis=0)
    # new centers sit inside the 25%-expanded box; rescaled spread adds at most 1.7 * 1.15 of it
    lo = all_pts.min(axis=0) - span * (0.25 + 2.0)
    hi = all_pts.max(axis=0) + span * (0.25 + 2.0)
    assert (exploded["orange"] >= lo).all()
    assert (exploded["orange"] <= hi).all()


def test_explode_is_reproducible(dists):
    a = explode_distribution(dists, "red", random_state=9)
    b = explode_distribution(dists, "red", random_state=9)
    np.testing.assert_array_equal(a["red"], b["red"])


def test_explode_single_point_group():
    d = {"a": np.array([[1.0, 1.0]]), "b": np.array([[5.0, 5.0], [6.0, 6.0]])}
    out = explode_distribution(d, "a", random_state=0)
    assert out["a"].shape == (1, 2)


def test_explode_does_not_mutate_input(dists):
    before = dists["blue"].copy()
    explode_distribution(dists, "blue", random_state=1)
    np.testing.assert_array_equal(dists["blue"], before)
