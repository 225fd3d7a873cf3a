"""
Palette Rule Colors Module

Sampling, quantization, similarity merging and ranking of dominant colors,
plus evaluation of the 60/30/10 design rule.
"""

from .extraction import analyze_image_colors, extract_palette_report
from .quantization import quantize, parse_color_key, color_distance
from .rule import check_design_rule, evaluate_design_rule

__all__ = [
    'analyze_image_colors',
    'extract_palette_report',
    'quantize',
    'parse_color_key',
    'color_distance',
    'check_design_rule',
    'evaluate_design_rule',
]
