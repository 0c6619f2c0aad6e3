import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import pytest
from sklearn.datasets import make_blobs

from gauss_kmeans.selection import (
    best_k_by_score,
    compute_metrics_over_k,
    detect_elbow,
    plot_elbow,
)


@pytest.fixture
def X():
    """Small synthetic dataset with 3 centers."""
    X, _ = make_blobs(
        n_samples=60,
        centers=3,
        cluster_std=0.5,
        random_state=0
    )
    return X


def test_compute_metrics_over_k(X):
    df = compute_metrics_over_k(X, k_range=range(1, 6), random_state=0)

    # One row per k value
    assert list(df["n_clusters"]) == [1, 2, 3, 4, 5]

    for col in (
        "sse",
        "iterations",
        "average_intra_distance",
        "average_inter_centroid_distance",
        "min_inter_centroid_distance",
        "score",
        "silhouette",
        "calinski_harabasz",
        "davies_bouldin",
    ):
        assert col in df.columns

    # k=1 has no centroid pairs and a single label
    row = df.loc[1]
    assert row["average_inter_centroid_distance"] == 0
    assert row["score"] == 0
    assert np.isnan(row["silhouette"])
    assert (df["sse"] >= 0).all()


def test_compute_metrics_over_k_rejects_k_above_n(X):
    with pytest.raises(ValueError):
        compute_metrics_over_k(X[:3], k_range=[2, 4], random_state=0)


def test_compute_metrics_over_k_is_reproducible(X):
    a = compute_metrics_over_k(X, range(2, 5), random_state=4)
    b = compute_metrics_over_k(X, range(2, 5), random_state=4)
    pd.testing.assert_frame_equal(a, b)


def test_best_k_by_score_ties_go_to_smallest_k():
    df = pd.DataFrame({"n_clusters": [2, 3, 4], "score": [1.0, 3.0, 3.0]})
    assert best_k_by_score(df) == 3


def test_detect_elbow_finds_knee():
    df = pd.DataFrame({
        "n_clusters": [1, 2, 3, 4, 5, 6],
        "sse":        [1000.0, 400.0, 60.0, 50.0, 42.0, 36.0],
        "score":      [0.0, 2.0, 5.0, 4.0, 3.5, 3.0],
    })
    assert detect_elbow(df) == 3


def test_detect_elbow_falls_back_to_score():
    df = pd.DataFrame({
        "n_clusters": [2, 3],
        "sse":        [10.0, 5.0],
        "score":      [1.0, 2.0],
    })
    assert detect_elbow(df) == 3


def test_plot_elbow_outputs_figure(X):
    df = compute_metrics_over_k(X, k_range=range(1, 6), random_state=0)
    fig = plot_elbow(df, elbow_k=3)

    # Should return a Figure
    assert hasattr(fig, "savefig")

    # SSE line, score line and the elbow marker
    total_lines = sum(len(ax.get_lines()) for ax in fig.axes)
    assert total_lines >= 3

    plt.close(fig)
