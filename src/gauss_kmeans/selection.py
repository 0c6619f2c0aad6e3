import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from kneed import KneeLocator

from gauss_kmeans.clusterer import KMeansClusterer
from gauss_kmeans.rng import as_random_state


def compute_metrics_over_k(X, k_range, *, random_state=None, max_iter=None) -> pd.DataFrame:
    """
    Cluster X once per k and collect one row of diagnostics per k.

    Args:
      X            : array, shape (n_samples, 2)
      k_range      : iterable of cluster counts; every k must be <= n_samples
      random_state : seed or RandomState, shared across the sweep

    Columns: n_clusters, sse, iterations, the separation/compactness summary
    (average_intra_distance, average_inter_centroid_distance,
    min_inter_centroid_distance, score), silhouette, calinski_harabasz,
    davies_bouldin.
    """
    rs = as_random_state(random_state)
    X = np.asarray(X, dtype=float)
    kwargs = {} if max_iter is None else {"max_iter": max_iter}
    records = []

    for k in k_range:
        km = KMeansClusterer(n_clusters=k, random_state=rs, **kwargs).fit(X)
        m = km.get_metrics()
        summary = m["summary"]

        records.append({
            "n_clusters":                      int(k),
            "sse":                             km.inertia_,
            "iterations":                      km.n_iter_,
            "average_intra_distance":          summary.average_intra_distance,
            "average_inter_centroid_distance": summary.average_inter_centroid_distance,
            "min_inter_centroid_distance":     summary.min_inter_centroid_distance,
            "score":                           summary.score,
            "silhouette":                      m["silhouette"],
            "calinski_harabasz":               m["calinski_harabasz"],
            "davies_bouldin":                  m["davies_bouldin"],
        })

    df = pd.DataFrame(records)
    if not df.empty:
        df = df.set_index("n_clusters", drop=False)
    return df


def best_k_by_score(df: pd.DataFrame) -> int:
    """k with the highest score; ties go to the smallest k."""
    top = df["score"].max()
    return int(df.loc[df["score"] == top, "n_clusters"].min())


def detect_elbow(df: pd.DataFrame, curve: str = "convex", direction: str = "decreasing") -> int:
    """
    Knee of the SSE-vs-k curve. Falls back to the best-scoring k when
    KneeLocator finds no knee (e.g. fewer than three ks).
    """
    ks = df["n_clusters"].to_numpy(dtype=float)
    sse = df["sse"].to_numpy(dtype=float)
    knee = None
    if len(ks) >= 3:
        knee = KneeLocator(ks, sse, curve=curve, direction=direction).knee
    if knee is None:
        return best_k_by_score(df)
    return int(knee)


def plot_elbow(df: pd.DataFrame, elbow_k: int = None):
    """
    SSE vs. k with the score on a twin axis.
    """
    ks = df["n_clusters"].to_numpy()

    fig, ax = plt.subplots()
    ax.plot(ks, df["sse"].to_numpy(), "bx-", label="SSE")
    ax.set_xlabel("Number of clusters (k)")
    ax.set_ylabel("SSE")
    ax.set_xticks(ks)

    ax2 = ax.twinx()
    ax2.plot(ks, df["score"].to_numpy(), "o--", color="#E69F00", label="Score")
    ax2.set_ylabel("Score (separation / intra)")

    if elbow_k is not None:
        ax.axvline(elbow_k, color="red", linestyle="--", linewidth=2, label="Elbow")

    ax.set_title("Elbow Method for Optimal k")
    ax.grid(True)
    return fig
