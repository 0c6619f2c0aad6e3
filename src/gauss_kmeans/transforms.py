import math

import numpy as np
from loguru import logger

from gauss_kmeans.config import DEFAULT_CONFIG
from gauss_kmeans.rng import as_random_state


# screen coordinates: "up" decreases y
DIRECTIONS = {
    "up":    (0.0, -1.0),
    "down":  (0.0, 1.0),
    "left":  (-1.0, 0.0),
    "right": (1.0, 0.0),
}


def _require_group(distributions, label):
    if label not in distributions:
        raise KeyError(f"Unknown group {label!r}; available: {list(distributions)}")


def move_distribution(distributions, label, dx, dy):
    """Return a copy of `distributions` with group `label` translated by (dx, dy)."""
    _require_group(distributions, label)
    moved = dict(distributions)
    moved[label] = np.asarray(distributions[label], dtype=float).reshape(-1, 2) + [dx, dy]
    return moved


def nudge(distributions, label, direction, step=DEFAULT_CONFIG.move_step):
    """One keyboard-style step of `step` units in `direction`."""
    try:
        ux, uy = DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"Unknown direction {direction!r}; expected one of {list(DIRECTIONS)}") from None
    return move_distribution(distributions, label, ux * step, uy * step)


def _expanded_bounds(distributions, buffer_ratio):
    all_pts = np.vstack([np.asarray(p, dtype=float).reshape(-1, 2) for p in distributions.values()])
    mins = all_pts.min(axis=0)
    maxs = all_pts.max(axis=0)
    ranges = maxs - mins
    ranges[ranges == 0] = 1.0
    return mins - ranges * buffer_ratio, maxs + ranges * buffer_ratio


def explode_distribution(distributions, label, random_state=None,
                         buffer_ratio=DEFAULT_CONFIG.explode_buffer_ratio):
    """
    Split group `label` into two random halves and drop each half somewhere
    new inside the (expanded) bounding box of all points, rescaled around
    its own mean.

    Returns a new mapping; the group keeps its point count, first half first.
    """
    _require_group(distributions, label)
    pts = np.asarray(distributions[label], dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        return dict(distributions)

    rs = as_random_state(random_state)
    low, high = _expanded_bounds(distributions, buffer_ratio)

    side = rs.random_sample(len(pts)) < 0.5
    halves = [pts[side], pts[~side]]
    if len(halves[0]) == 0 or len(halves[1]) == 0:
        half = math.ceil(len(pts) / 2)
        halves = [pts[:half], pts[half:]]

    exploded = []
    for group in halves:
        if len(group) == 0:
            continue
        centroid = group.mean(axis=0)
        new_center = low + rs.random_sample(2) * (high - low)
        if rs.random_sample() < 0.5:
            scale = rs.random_sample() * 0.5 + 0.4   # concentrate
        else:
            scale = rs.random_sample() * 0.7 + 1.0   # spread out
        cohesion = rs.random_sample() * 0.3 + 0.85
        exploded.append(new_center + (group - centroid) * scale * cohesion)

    logger.debug(f"Exploded group {label!r} ({len(pts)} points) into {len(exploded)} parts")
    result = dict(distributions)
    result[label] = np.vstack(exploded)
    return result
