"""
Palette analysis pipeline.

This module wires the color analysis stages together:
sampling and bucketing, similarity merging, ranking with percentage
normalization, and the 60/30/10 rule check. Every call is a pure function
of the pixel buffer; stage timings and logs are side effects only.
"""

from typing import Optional

from loguru import logger

from ...errors import PaletteAnalysisError
from ...schemas import AnalysisResult, PaletteReport
from ...utils.logging import get_logger
from ..observability import performance_monitor
from .clustering import merge_similar_colors
from .ranking import normalize_percentages, rank_clusters
from .rule import evaluate_design_rule
from .sampling import build_frequency_table


def analyze_image_colors(pixels, width: Optional[int] = None,
                         height: Optional[int] = None) -> AnalysisResult:
    """
    Extract the three dominant colors of a decoded RGBA raster.

    Args:
        pixels: Row-major RGBA data. A flat sequence of width*height*4
            values, an (N, 4) sequence of RGBA tuples, or an
            (height, width, 4) array.
        width: Raster width; inferred for 3-D arrays
        height: Raster height; inferred for 3-D arrays

    Returns:
        AnalysisResult with up to three colors whose percentages sum to 100.
        A raster with no opaque samples yields no colors and
        total_colors == 0.

    Raises:
        PixelBufferError: If the buffer does not describe an RGBA raster
        MalformedColorKeyError: If an internal color key is corrupt
    """
    try:
        with performance_monitor("pixel_sampling"):
            table = build_frequency_table(pixels, width, height)

        if table.opaque_samples == 0:
            logger.warning(f"No opaque pixels sampled from {table.total_pixels} pixels")

        with performance_monitor("color_merging", pixel_count=table.opaque_samples):
            clusters = merge_similar_colors(table.counts)

        with performance_monitor("ranking", cluster_count=len(clusters)):
            colors = normalize_percentages(rank_clusters(clusters), table.sampled_population)

    except PaletteAnalysisError as e:
        logger.error(f"Palette analysis failed: {e}")
        raise

    return AnalysisResult(
        colors=colors,
        total_colors=table.total_colors,
        total_pixels=table.total_pixels,
        stride=table.stride,
        sampled_population=table.sampled_population,
        opaque_samples=table.opaque_samples,
        cluster_count=len(clusters),
    )


def extract_palette_report(pixels, width: Optional[int] = None,
                           height: Optional[int] = None) -> PaletteReport:
    """Analyze a raster and evaluate its palette against the 60/30/10 rule."""
    analysis = analyze_image_colors(pixels, width, height)
    rule = evaluate_design_rule(analysis.colors)
    get_logger().analysis_summary(analysis, follows_rule=rule.follows_rule)
    return PaletteReport(analysis=analysis, rule=rule)
