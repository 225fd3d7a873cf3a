"""
Similarity merging of quantized color buckets.

A single greedy pass over the frequency mapping: each bucket not yet claimed
seeds a cluster and absorbs every other unclaimed bucket whose quantized
color lies within MERGE_TOLERANCE of the seed's own color. Membership is
tested against the seed, never against the evolving centroid, so the result
depends on the mapping's iteration order (first-seen order during sampling).
"""

import math
from dataclasses import dataclass
from typing import List, Mapping, Set

from loguru import logger

from .quantization import (
    CENTROID_LEVELS, RGB, color_distance, parse_color_key, quantize
)

MERGE_TOLERANCE = 30.0


@dataclass(frozen=True)
class Cluster:
    """A merged group of buckets: re-quantized centroid key plus total weight."""
    color: str
    weight: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_centroid(members: List[RGB], counts: List[int]) -> RGB:
    """Count-weighted mean of member colors, rounded to the nearest integer."""
    total = sum(counts)
    sums = [0, 0, 0]
    for rgb, count in zip(members, counts):
        for channel in range(3):
            sums[channel] += rgb[channel] * count
    return (
        _round_half_up(sums[0] / total),
        _round_half_up(sums[1] / total),
        _round_half_up(sums[2] / total),
    )


def merge_similar_colors(counts: Mapping[str, int],
                         tolerance: float = MERGE_TOLERANCE) -> List[Cluster]:
    """
    Partition frequency buckets into clusters of similar colors.

    Args:
        counts: Quantized color key -> sample count, in first-seen order
        tolerance: Maximum Euclidean RGB distance from the seed color

    Returns:
        One Cluster per seed, in seed order. The centroid is re-quantized at
        CENTROID_LEVELS.

    Raises:
        MalformedColorKeyError: If a key in ``counts`` cannot be parsed
    """
    buckets = [(key, parse_color_key(key), count) for key, count in counts.items()]
    processed: Set[str] = set()
    clusters: List[Cluster] = []

    for seed_key, seed_rgb, seed_count in buckets:
        if seed_key in processed:
            continue
        processed.add(seed_key)
        members = [seed_rgb]
        weights = [seed_count]

        for key, rgb, count in buckets:
            if key in processed:
                continue
            if color_distance(seed_rgb, rgb) <= tolerance:
                members.append(rgb)
                weights.append(count)
                processed.add(key)

        centroid = weighted_centroid(members, weights)
        clusters.append(Cluster(color=quantize(*centroid, levels=CENTROID_LEVELS),
                                weight=sum(weights)))
        if len(members) > 1:
            logger.debug(f"Merged {len(members)} buckets around {seed_key} -> {clusters[-1].color}")

    logger.info(f"Merged {len(buckets)} color buckets into {len(clusters)} clusters")
    return clusters

