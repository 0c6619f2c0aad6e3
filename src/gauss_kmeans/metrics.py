import math

import numpy as np
from scipy.spatial.distance import pdist
from sklearn.metrics import (
    silhouette_score,
    calinski_harabasz_score,
    davies_bouldin_score,
)

from gauss_kmeans.entities import ClusterMetricsSummary


# ── Distances ─────────────────────────────────────────────────────────────────

def euclidean_distance(p1, p2) -> float:
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return math.sqrt(dx * dx + dy * dy)


def cosine_distance(p1, p2) -> float:
    """
    1 - cosine similarity of two vectors.

    A zero-magnitude vector has no direction, so it is treated as maximally
    dissimilar and the distance is exactly 1.
    """
    norm1 = math.hypot(p1[0], p1[1])
    norm2 = math.hypot(p2[0], p2[1])
    if norm1 == 0 or norm2 == 0:
        return 1.0
    similarity = (p1[0] * p2[0] + p1[1] * p2[1]) / (norm1 * norm2)
    return 1.0 - similarity


def squared_distances(X, centroids) -> np.ndarray:
    """
    Squared Euclidean distance of every point to every centroid,
    shape (n_samples, n_centroids).
    """
    diffs = X[:, None, :] - centroids[None, :, :]
    return np.einsum('ijk,ijk->ij', diffs, diffs)


# ── Separation / compactness summary ──────────────────────────────────────────

def compute_metrics(points, assignments, centroids) -> ClusterMetricsSummary:
    """
    Intra-cluster compactness, inter-centroid separation and their ratio.

    Assignments outside [0, len(centroids)) are ignored. Statistics with
    nothing to average fall back to 0.
    """
    X = np.asarray(points, dtype=float).reshape(-1, 2)
    labels = np.asarray(assignments, dtype=int)
    cents = np.asarray(centroids, dtype=float).reshape(-1, 2)
    k = len(cents)

    valid = (labels >= 0) & (labels < k)
    pts = X[valid]
    lbls = labels[valid]
    dists = np.linalg.norm(pts - cents[lbls], axis=1)

    avg_intra = float(dists.mean()) if len(dists) else 0.0

    per_cluster = []
    for idx in range(k):
        d = dists[lbls == idx]
        per_cluster.append(float(d.mean()) if len(d) else 0.0)

    if k >= 2:
        pair_dists = pdist(cents)    # all C(k, 2) pairs
        avg_inter = float(pair_dists.mean())
        min_inter = float(pair_dists.min())
    else:
        avg_inter = 0.0
        min_inter = 0.0

    score = avg_inter / avg_intra if avg_intra != 0 else 0.0

    return ClusterMetricsSummary(
        average_intra_distance=avg_intra,
        average_inter_centroid_distance=avg_inter,
        min_inter_centroid_distance=min_inter,
        per_cluster_average_distance=tuple(per_cluster),
        score=score,
    )


# ── Supplementary diagnostics ─────────────────────────────────────────────────

def compute_silhouette(X, labels):
    if 1 < len(set(labels)) < len(X):
        return float(silhouette_score(X, labels))
    return np.nan


def compute_calinski_harabasz(X, labels):
    if 1 < len(set(labels)) < len(X):
        return float(calinski_harabasz_score(X, labels))
    return np.nan


def compute_davies_bouldin(X, labels):
    if 1 < len(set(labels)) < len(X):
        return float(davies_bouldin_score(X, labels))
    return np.nan


def cluster_population_distribution(labels):
    unique, counts = np.unique(labels, return_counts=True)
    return {int(u): int(c) for u, c in zip(unique, counts)}


def compute_wcss_per_cluster(X, labels, centroids):
    """
    Returns dict {cluster_id: within-cluster sum of squares}.
    """
    wcss = {}
    for idx, c in enumerate(centroids):
        pts = X[labels == idx]
        wcss[idx] = float(np.sum((pts - c)**2)) if len(pts) else 0.0
    return wcss


def compute_all_metrics(X, labels, centroids):
    summary = compute_metrics(X, labels, centroids)
    return {
        "silhouette": compute_silhouette(X, labels),
        "calinski_harabasz": compute_calinski_harabasz(X, labels),
        "davies_bouldin": compute_davies_bouldin(X, labels),
        "population": cluster_population_distribution(labels),
        "wcss": compute_wcss_per_cluster(X, labels, centroids),
        "summary": summary,
    }
