from dataclasses import dataclass, field
from typing import Dict, Tuple

from gauss_kmeans.entities import Point


@dataclass(frozen=True)
class PlaygroundConfig:
    """
    Policy constants for the playground.

    The default std-dev is tuned against the triangle centers so that the
    generated groups overlap by roughly 30%.
    """
    sample_size: int = 200
    std_dev: float = 1.8
    centers: Dict[str, Point] = field(default_factory=lambda: {
        # vertices of an equilateral triangle
        "blue":   Point(2.5, 0.0),
        "red":    Point(-1.25, 2.16),
        "orange": Point(-1.25, -2.16),
    })
    group_colors: Dict[str, str] = field(default_factory=lambda: {
        "blue":   "#3b82f6",
        "red":    "#ef4444",
        "orange": "#f97316",
    })
    cluster_colors: Tuple[str, ...] = ("#22c55e", "#000000", "#a855f7", "#06b6d4")
    cluster_names: Tuple[str, ...] = ("Circle", "Square", "Triangle", "Rhombus")
    main_k: int = 3
    alternative_ks: Tuple[int, ...] = (2, 4)
    max_iter: int = 100
    comparison_eps: float = 1e-3
    move_step: float = 0.2
    explode_buffer_ratio: float = 0.25


DEFAULT_CONFIG = PlaygroundConfig()
