from gauss_kmeans.entities import (
    Point,
    GroupSpec,
    ClusteringResult,
    ClusterMetricsSummary,
    ComparisonSummary,
)
from gauss_kmeans.synthetic_data import generate, default_group_specs, flatten_distributions
from gauss_kmeans.clusterer import cluster, KMeansClusterer
from gauss_kmeans.metrics import compute_metrics, euclidean_distance, cosine_distance
from gauss_kmeans.comparison import compare, describe_point
from gauss_kmeans.transforms import move_distribution, nudge, explode_distribution

__version__ = "0.1.0"
