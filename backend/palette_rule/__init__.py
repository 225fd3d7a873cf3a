"""
Palette Rule

Dominant color extraction and 60/30/10 design rule evaluation for decoded
raster images.
"""

__version__ = "1.0.0"
