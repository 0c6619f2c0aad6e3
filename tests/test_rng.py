import numpy as np
import pytest

from gauss_kmeans.clusterer import cluster
from gauss_kmeans.rng import as_random_state
from gauss_kmeans.synthetic_data import default_group_specs, generate
from gauss_kmeans.transforms import explode_distribution


@pytest.fixture
def scattered_points():
    return np.random.RandomState(7).uniform(-10, 10, size=(200, 2))


def _global_state():
    return np.random.get_state()[1].copy()


def test_none_gives_fresh_random_state():
    rs = as_random_state(None)
    assert isinstance(rs, np.random.RandomState)
    assert as_random_state(None) is not rs


def test_int_and_instance_go_through_check_random_state():
    rs = np.random.RandomState(3)
    assert as_random_state(rs) is rs
    np.testing.assert_array_equal(
        as_random_state(5).random_sample(4),
        np.random.RandomState(5).random_sample(4),
    )


def test_unseeded_calls_leave_global_rng_untouched(scattered_points):
    np.random.seed(123)
    before = _global_state()

    cluster(scattered_points, 4)
    dists, _ = generate(20, default_group_specs())
    explode_distribution(dists, "blue")

    np.testing.assert_array_equal(_global_state(), before)


def test_global_seed_does_not_pin_unseeded_clustering(scattered_points):
    np.random.seed(123)
    a = cluster(scattered_points, 5, max_iter=1)
    np.random.seed(123)
    b = cluster(scattered_points, 5, max_iter=1)
    assert not np.array_equal(a.centroids, b.centroids)


def test_global_seed_does_not_pin_unseeded_generation():
    np.random.seed(123)
    a, _ = generate(50, default_group_specs())
    np.random.seed(123)
    b, _ = generate(50, default_group_specs())
    assert not np.array_equal(a["blue"], b["blue"])
