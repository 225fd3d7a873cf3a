"""
Dominance ranking and percentage normalization.
"""

from typing import List

from loguru import logger

from ...schemas import ColorPercentage
from .clustering import Cluster
from .quantization import key_to_hex

TOP_COLORS = 3


def rank_clusters(clusters: List[Cluster], limit: int = TOP_COLORS) -> List[Cluster]:
    """Heaviest clusters first; ties keep seed order (stable sort)."""
    return sorted(clusters, key=lambda c: c.weight, reverse=True)[:limit]


def normalize_percentages(clusters: List[Cluster], sampled_population: float) -> List[ColorPercentage]:
    """
    Convert ranked cluster weights to percentages that sum to 100.

    Each weight is first taken as a share of ``sampled_population`` (which
    also counts transparent and unreported samples), then the shares are
    rescaled by their own sum.

    Args:
        clusters: Ranked clusters, at most TOP_COLORS
        sampled_population: total_pixels / stride

    Returns:
        ColorPercentage entries in rank order; empty when there is nothing
        to normalize
    """
    if not clusters or sampled_population <= 0:
        return []

    raw = [(c.weight / sampled_population) * 100 for c in clusters]
    sum_before = sum(raw)
    if sum_before == 0:
        logger.warning("Ranked clusters carry no weight, skipping normalization")
        return []

    return [
        ColorPercentage(
            color=cluster.color,
            hex=key_to_hex(cluster.color),
            percentage=(percentage / sum_before) * 100,
        )
        for cluster, percentage in zip(clusters, raw)
    ]
