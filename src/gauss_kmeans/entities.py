from dataclasses import dataclass, asdict
from typing import Dict, NamedTuple, Tuple

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


class GroupSpec(NamedTuple):
    """Generative description of one labelled group."""
    center: Point
    std_dev: float


@dataclass(frozen=True, eq=False)
class ClusteringResult:
    """
    Output of one k-means run.

    assignments : int array, shape (n_samples,), parallel to the input points
    centroids   : float array, shape (k, 2)
    iterations  : refinement rounds executed, including the converging one
    sse         : sum of squared distances to the assigned centroids
    """
    assignments: np.ndarray
    centroids: np.ndarray
    iterations: int
    sse: float
    k: int

    def __post_init__(self):
        # own read-only copies; the caller's arrays stay writable
        assignments = np.array(self.assignments, dtype=int)
        centroids = np.array(self.centroids, dtype=float).reshape(-1, 2)
        assignments.setflags(write=False)
        centroids.setflags(write=False)
        object.__setattr__(self, "assignments", assignments)
        object.__setattr__(self, "centroids", centroids)

    def __eq__(self, other):
        # compared by value, arrays element-wise
        if not isinstance(other, ClusteringResult):
            return NotImplemented
        return (
            self.k == other.k
            and self.iterations == other.iterations
            and self.sse == other.sse
            and np.array_equal(self.assignments, other.assignments)
            and np.array_equal(self.centroids, other.centroids)
        )

    def centroid_points(self) -> Tuple[Point, ...]:
        return tuple(Point(float(x), float(y)) for x, y in self.centroids)


@dataclass(frozen=True)
class ClusterMetricsSummary:
    average_intra_distance: float
    average_inter_centroid_distance: float
    min_inter_centroid_distance: float
    per_cluster_average_distance: Tuple[float, ...] = ()
    score: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ComparisonSummary:
    baseline_k: int
    alternative_k: int
    baseline_metrics: ClusterMetricsSummary
    alternative_metrics: ClusterMetricsSummary
    recommended_k: int
    explanation: str
