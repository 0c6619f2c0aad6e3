import numbers

import numpy as np
import pandas as pd
from loguru import logger

from gauss_kmeans.config import DEFAULT_CONFIG
from gauss_kmeans.entities import ClusteringResult
from gauss_kmeans.metrics import compute_all_metrics, squared_distances
from gauss_kmeans.rng import as_random_state


MAX_ITERATIONS = DEFAULT_CONFIG.max_iter


def _validate_points(points):
    if isinstance(points, pd.DataFrame):
        points = points.values
    X = np.asarray(points, dtype=float)
    if X.size == 0:
        X = X.reshape(0, 2)
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError(f"Points must have shape (n_samples, 2), got {X.shape}")
    if not np.isfinite(X).all():
        raise ValueError("Points must have finite coordinates")
    return X


def _validate_k(k, n_samples):
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise ValueError(f"k must be a positive integer, got {k!r}")
    if n_samples < k:
        raise ValueError(
            f"Cannot run k-means: number of points ({n_samples}) is less than k ({k})"
        )
    return int(k)


def cluster(points, k, random_state=None, max_iter=MAX_ITERATIONS) -> ClusteringResult:
    """
    Lloyd's algorithm.

    1) seed the centroids with k distinct random point indices
    2) assign every point to its nearest centroid (lowest index on ties)
    3) stop once an assignment pass changes nothing
    4) otherwise move each centroid to the mean of its points; an empty
       cluster is reseeded with a random input point
    The converging pass counts as an iteration. Stops after `max_iter`
    passes at the latest.
    """
    X = _validate_points(points)
    n_samples = X.shape[0]
    k = _validate_k(k, n_samples)
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter!r}")
    rs = as_random_state(random_state)

    centroids = X[rs.choice(n_samples, size=k, replace=False)].copy()
    assignments = np.full(n_samples, -1, dtype=int)
    iterations = 0
    converged = False

    while iterations < max_iter:
        # argmin keeps the first minimum, so ties favour the lower index
        new_assignments = squared_distances(X, centroids).argmin(axis=1)

        if np.array_equal(new_assignments, assignments):
            iterations += 1
            converged = True
            break
        assignments = new_assignments

        new_centroids = np.empty_like(centroids)
        for idx in range(k):
            members = X[assignments == idx]
            if len(members):
                new_centroids[idx] = members.mean(axis=0)
            else:
                new_centroids[idx] = X[rs.randint(n_samples)]
                logger.debug(f"k-means: cluster {idx} emptied, reseeded from a random point")
        centroids = new_centroids
        iterations += 1

    if not converged:
        logger.warning(f"k-means (k={k}) stopped at the iteration ceiling ({max_iter}) without converging")

    sse = float(np.sum((X - centroids[assignments]) ** 2))
    logger.debug(f"k-means: k={k}, n={n_samples}, iterations={iterations}, sse={sse:.4f}")

    return ClusteringResult(
        assignments=assignments,
        centroids=centroids,
        iterations=iterations,
        sse=sse,
        k=k,
    )


class KMeansClusterer:
    """
    Estimator-style wrapper around `cluster`, for code that works with
    fitted objects (labels_, centroids_, ...).
    """

    def __init__(self, n_clusters=DEFAULT_CONFIG.main_k, random_state=None, max_iter=MAX_ITERATIONS):
        self.n_clusters = n_clusters
        self.random_state = random_state
        self.max_iter = max_iter

    def fit(self, X):
        X_arr = _validate_points(X)
        result = cluster(X_arr, self.n_clusters, random_state=self.random_state, max_iter=self.max_iter)
        self.result_ = result
        self.labels_ = result.assignments
        self.centroids_ = result.centroids
        self.inertia_ = result.sse
        self.n_iter_ = result.iterations
        self.X_ = X_arr
        return self

    def get_virtual_centroids(self):
        return np.array(self.centroids_)

    def get_real_centroids(self):
        """
        Map each centroid to the nearest actual data point.
        Returns array of shape (n_clusters, 2).
        """
        nearest = squared_distances(self.centroids_, self.X_).argmin(axis=1)
        return self.X_[nearest]

    def get_labels(self):
        return self.labels_

    def get_metrics(self):
        return compute_all_metrics(self.X_, self.labels_, self.centroids_)
