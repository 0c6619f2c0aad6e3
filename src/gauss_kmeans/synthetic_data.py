# synthetic_data.py

import math
import numbers

import numpy as np
from loguru import logger

from gauss_kmeans.config import DEFAULT_CONFIG
from gauss_kmeans.entities import GroupSpec, Point
from gauss_kmeans.metrics import squared_distances
from gauss_kmeans.rng import as_random_state


def box_muller(n_pairs, random_state=None):
    """
    Draw `n_pairs` pairs of independent standard normals from uniform draws.
    Uniform draws of exactly 0 are redrawn (log(0) is undefined).
    Returns (z1, z2), each of shape (n_pairs,).
    """
    rs = as_random_state(random_state)

    def _nonzero_uniform():
        u = rs.random_sample(n_pairs)
        zero = u == 0.0
        while zero.any():
            u[zero] = rs.random_sample(int(zero.sum()))
            zero = u == 0.0
        return u

    u1 = _nonzero_uniform()
    u2 = _nonzero_uniform()

    r = np.sqrt(-2.0 * np.log(u1))
    theta = 2.0 * np.pi * u2
    return r * np.cos(theta), r * np.sin(theta)


def generate_single_gaussian(center, std_dev, size, random_state=None):
    """
    Isotropic 2-D Gaussian sample of exactly `size` points, shape (size, 2).

    Each transform yields two points, (z1, z2) and (z2, z1), so
    ceil(size / 2) transforms are drawn and the surplus point is dropped
    once the whole sample is built.
    """
    cx, cy = center
    z1, z2 = box_muller(math.ceil(size / 2), random_state)

    first = np.column_stack([cx + z1 * std_dev, cy + z2 * std_dev])
    second = np.column_stack([cx + z2 * std_dev, cy + z1 * std_dev])

    # interleave: first[0], second[0], first[1], second[1], ...
    pts = np.empty((2 * len(z1), 2))
    pts[0::2] = first
    pts[1::2] = second
    return pts[:size]


def overlap_percentage(distributions, centers):
    """
    Share (in %) of points whose nearest generative center is not the one
    of their own group. Ties go to the earlier center. 0 with fewer than
    two groups.
    """
    labels = list(distributions.keys())
    if len(labels) < 2:
        return 0.0

    center_labels = list(centers.keys())
    cents = np.array([centers[lbl] for lbl in center_labels], dtype=float)

    crossover = 0
    total = 0
    for lbl in labels:
        pts = np.asarray(distributions[lbl], dtype=float).reshape(-1, 2)
        if len(pts) == 0:
            continue
        nearest = squared_distances(pts, cents).argmin(axis=1)
        crossover += int(sum(center_labels[i] != lbl for i in nearest))
        total += len(pts)

    return 100.0 * crossover / total if total > 0 else 0.0


def _validate_sample_size(sample_size):
    if isinstance(sample_size, bool) or not isinstance(sample_size, numbers.Real):
        raise ValueError(f"sample_size must be a positive integer, got {sample_size!r}")
    if not math.isfinite(sample_size) or sample_size <= 0:
        raise ValueError(f"sample_size must be a positive integer, got {sample_size!r}")
    if int(sample_size) != sample_size:
        raise ValueError(f"sample_size must be a whole number, got {sample_size!r}")
    return int(sample_size)


def group_centers(group_specs):
    """Centroid set {label: Point} of the generative centers."""
    return {lbl: Point(*map(float, spec[0])) for lbl, spec in group_specs.items()}


def default_group_specs(std_dev=None, config=DEFAULT_CONFIG):
    """The three-group triangle layout used by the playground."""
    if std_dev is None:
        std_dev = config.std_dev
    return {lbl: GroupSpec(center, std_dev) for lbl, center in config.centers.items()}


def generate(sample_size, group_specs, random_state=None):
    """
    Draw `sample_size` points around every group center.

    Args:
      sample_size  : points per group (positive integer)
      group_specs  : {label: (center, std_dev)}
      random_state : None, int seed or np.random.RandomState

    Returns:
      distributions : {label: array of shape (sample_size, 2)}
      overlap       : percentage of points nearer to a foreign center
    """
    size = _validate_sample_size(sample_size)
    if not group_specs:
        raise ValueError("At least one group spec is required")

    rs = as_random_state(random_state)
    distributions = {}
    for lbl, (center, std_dev) in group_specs.items():
        if not math.isfinite(std_dev) or std_dev < 0:
            raise ValueError(f"std_dev for group {lbl!r} must be finite and >= 0, got {std_dev!r}")
        distributions[lbl] = generate_single_gaussian(center, std_dev, size, rs)

    overlap = overlap_percentage(distributions, group_centers(group_specs))
    logger.debug(f"Generated {len(distributions)} groups x {size} points, overlap={overlap:.1f}%")
    return distributions, overlap


def flatten_distributions(distributions):
    """
    Stack all groups into one point set.
    Returns (X of shape (n, 2), origin labels of shape (n,)) in mapping order.
    """
    arrays = [np.asarray(pts, dtype=float).reshape(-1, 2) for pts in distributions.values()]
    if not arrays:
        return np.empty((0, 2)), np.empty(0, dtype=object)
    X = np.vstack(arrays)
    origin = np.concatenate([
        np.full(len(a), lbl, dtype=object)
        for lbl, a in zip(distributions.keys(), arrays)
    ])
    return X, origin
