import numpy as np
import matplotlib.pyplot as plt
import matplotlib as mpl

from gauss_kmeans.config import DEFAULT_CONFIG


def _cluster_palette(n, base=DEFAULT_CONFIG.cluster_colors):
    palette = list(base)
    extra = mpl.colormaps["tab10"].colors
    while len(palette) < n:
        palette.append(extra[(len(palette) - len(base)) % len(extra)])
    return palette


def plot_distributions(
        distributions: dict,
        centers: dict = None,
        title: str = None,
        colors: dict = None,
        figsize: tuple = (6, 6),
        savepath: str = None,
        point_size: int = 12,
        alpha: float = 0.7
) -> plt.Axes:
    """
    Scatter-plot each labelled group in its own colour.

    Args:
      distributions : {label: array (n, 2)}
      centers       : {label: Point}, generative centers to mark, optional
      colors        : {label: colour}, defaults to the playground colours;
                      unknown labels fall back to tab10
      savepath      : if given, calls fig.savefig(savepath)

    Returns:
      ax : the matplotlib Axes instance
    """
    if colors is None:
        colors = DEFAULT_CONFIG.group_colors
    fallback = mpl.colormaps["tab10"].colors

    fig, ax = plt.subplots(figsize=figsize)
    for i, (lbl, pts) in enumerate(distributions.items()):
        pts = np.asarray(pts, dtype=float).reshape(-1, 2)
        col = colors.get(lbl, fallback[i % len(fallback)])
        ax.scatter(pts[:, 0], pts[:, 1], c=[col], s=point_size, alpha=alpha, label=lbl)

    if centers:
        cx = [c[0] for c in centers.values()]
        cy = [c[1] for c in centers.values()]
        ax.scatter(cx, cy, c="none", edgecolor="black", s=150, marker="o",
                   linewidth=1.5, label="Centers")

    ax.set_aspect("equal", "box")
    if title:
        ax.set_title(title)
    ax.legend(loc="best", fontsize="small", framealpha=0.8)
    ax.grid(True)
    fig.tight_layout()

    if savepath:
        fig.savefig(savepath)
    return ax


def plot_clusters(
        X: np.ndarray,
        labels: np.ndarray,
        centroids: np.ndarray = None,
        title: str = None,
        palette: list = None,
        figsize: tuple = (6, 6),
        savepath: str = None,
        point_size: int = 20,
        alpha: float = 0.7
) -> plt.Axes:
    """
    Scatter-plot X coloured by `labels`.  Optionally overplot `centroids`.

    Args:
      X          : array-like, shape (n_samples, 2)
      labels     : int array, shape (n_samples,)
      centroids  : array, shape (n_clusters, 2), optional
      palette    : list of colours, defaults to the playground cluster colours
      savepath   : if given, calls fig.savefig(savepath)

    Returns:
      ax : the matplotlib Axes instance
    """
    X = np.asarray(X, dtype=float)
    labels = np.asarray(labels)
    fig, ax = plt.subplots(figsize=figsize)

    uniq = np.unique(labels)
    if palette is None:
        n_colors = int(uniq.max()) + 1 if len(uniq) else 0
        palette = _cluster_palette(n_colors)

    for lab in uniq:
        mask = labels == lab
        ax.scatter(
            X[mask, 0], X[mask, 1],
            c=[palette[int(lab) % len(palette)]],
            s=point_size,
            alpha=alpha,
            label=f"Cluster {lab}",
            edgecolor="k",
            linewidth=0.2
        )

    if centroids is not None:
        centroids = np.asarray(centroids, dtype=float)
        ax.scatter(
            centroids[:, 0], centroids[:, 1],
            c="red",
            s=200,
            marker="X",
            linewidth=1.5,
            label="Centroids"
        )

    ax.set_aspect("equal", "box")
    if title:
        ax.set_title(title)
    ax.legend(loc="best", fontsize="small", framealpha=0.8)
    ax.grid(True)
    fig.tight_layout()

    if savepath:
        fig.savefig(savepath)
    return ax
