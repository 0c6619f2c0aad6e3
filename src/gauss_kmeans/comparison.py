from gauss_kmeans.config import DEFAULT_CONFIG
from gauss_kmeans.entities import ComparisonSummary
from gauss_kmeans.metrics import cosine_distance, euclidean_distance


SCORE_EPS = DEFAULT_CONFIG.comparison_eps


def _fmt(value):
    return f"{value:.3f}"


def compare(baseline_result, baseline_metrics, alternative_result, alternative_metrics,
            eps=SCORE_EPS) -> ComparisonSummary:
    """
    Recommend one of two k values by their separation-to-compactness score.

    The alternative wins only if its score beats the baseline by more than
    `eps`; within `eps` the baseline is kept and the two are reported as
    comparable.
    """
    base_k, alt_k = baseline_result.k, alternative_result.k
    base_score, alt_score = baseline_metrics.score, alternative_metrics.score
    base_intra = baseline_metrics.average_intra_distance
    alt_intra = alternative_metrics.average_intra_distance
    base_inter = baseline_metrics.average_inter_centroid_distance
    alt_inter = alternative_metrics.average_inter_centroid_distance

    summary_line = (
        f"Avg intra distance: k={base_k}: {_fmt(base_intra)}, k={alt_k}: {_fmt(alt_intra)}. "
        f"Avg centroid separation: k={base_k}: {_fmt(base_inter)}, k={alt_k}: {_fmt(alt_inter)}."
    )

    # direction of change when moving from the baseline to the alternative
    intra = "tightens" if alt_intra < base_intra else "loosens"
    inter = "widens" if alt_inter > base_inter else "narrows"

    if alt_score - base_score > eps:
        recommended_k = alt_k
        explanation = (
            f"k={alt_k} is recommended: its separation-to-compactness score ({_fmt(alt_score)}) "
            f"exceeds k={base_k} ({_fmt(base_score)}). "
            f"It {intra} clusters ({_fmt(base_intra)} -> {_fmt(alt_intra)}) and "
            f"{inter} centroid separation ({_fmt(base_inter)} -> {_fmt(alt_inter)}), "
            f"so the overall ratio improves. {summary_line}"
        )
    elif base_score - alt_score > eps:
        recommended_k = base_k
        base_intra_desc = ("keeps clusters tighter" if base_intra <= alt_intra
                           else "allows looser clusters")
        base_inter_desc = ("keeps centroid separation wider" if base_inter >= alt_inter
                           else "narrows centroid separation")
        explanation = (
            f"Stick with k={base_k}: its score ({_fmt(base_score)}) beats "
            f"k={alt_k} ({_fmt(alt_score)}). "
            f"It {base_intra_desc} ({_fmt(base_intra)} vs {_fmt(alt_intra)}) and "
            f"{base_inter_desc} ({_fmt(base_inter)} vs {_fmt(alt_inter)}), "
            f"giving the better balance between separation and compactness. {summary_line}"
        )
    else:
        recommended_k = base_k
        explanation = (
            f"k={base_k} and k={alt_k} are comparable "
            f"(scores {_fmt(base_score)} vs {_fmt(alt_score)}), so k={base_k} is kept. "
            f"Moving to k={alt_k} {intra} clusters ({_fmt(base_intra)} -> {_fmt(alt_intra)}) and "
            f"{inter} centroid separation ({_fmt(base_inter)} -> {_fmt(alt_inter)}). "
            f"{summary_line}"
        )

    return ComparisonSummary(
        baseline_k=base_k,
        alternative_k=alt_k,
        baseline_metrics=baseline_metrics,
        alternative_metrics=alternative_metrics,
        recommended_k=recommended_k,
        explanation=explanation,
    )


def cluster_name(index, names=DEFAULT_CONFIG.cluster_names):
    return names[index] if index < len(names) else f"Cluster {index + 1}"


def describe_point(point, origin_label, result, group_centers=None):
    """
    Text report for one inspected point: its nearest k-means centroid,
    Euclidean distances to every centroid and, if the generative centers
    are given, cosine distances to those.
    """
    if result is None or len(result.centroids) == 0:
        return "Run k-means to view distances to the latest cluster centers."

    distances = [euclidean_distance(point, c) for c in result.centroids]
    # first minimum wins, as in the assignment step
    nearest = min(range(len(distances)), key=distances.__getitem__)

    lines = [
        f"{cluster_name(nearest)} point ({point[0]:.2f}, {point[1]:.2f}) "
        f"originally from {origin_label} group.",
        f"Euclidean distances to latest cluster centers (k={result.k}):",
    ]
    lines += [f"  - {cluster_name(i)}: {d:.4f}" for i, d in enumerate(distances)]

    if group_centers:
        lines.append("Cosine distances to generative centers:")
        lines += [
            f"  - {lbl}: {cosine_distance(point, center):.4f}"
            for lbl, center in group_centers.items()
        ]
    return "\n".join(lines) + "\n"
