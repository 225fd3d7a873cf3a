"""
Color quantization and canonical color keys.

Colors are snapped onto a coarse per-channel grid and represented by a
canonical ``rgb(r,g,b)`` key so that near-identical pixels collapse into one
frequency bucket.
"""

import math
import re
from typing import Tuple

from ...errors import MalformedColorKeyError

RGB = Tuple[int, int, int]

BUCKET_LEVELS = 16    # initial bucketing grid
CENTROID_LEVELS = 32  # grid for re-quantized cluster centroids

_KEY_PATTERN = re.compile(r"^rgb\((\d+),(\d+),(\d+)\)$")


def quantize_channel(value: int, levels: int) -> int:
    """Snap one 0-255 channel value to the lower edge of its grid cell."""
    if levels <= 0 or 256 % levels != 0:
        raise ValueError(f"levels must be a divisor of 256, got {levels}")
    step = 256 // levels
    return (value // step) * step


def quantize_rgb(r: int, g: int, b: int, levels: int = CENTROID_LEVELS) -> RGB:
    """Quantize an RGB triple, returning the snapped triple."""
    return (
        quantize_channel(r, levels),
        quantize_channel(g, levels),
        quantize_channel(b, levels),
    )


def format_color_key(rgb: RGB) -> str:
    """Render an RGB triple as its canonical key."""
    r, g, b = rgb
    return f"rgb({r},{g},{b})"


def quantize(r: int, g: int, b: int, levels: int = CENTROID_LEVELS) -> str:
    """
    Quantize an RGB color to a canonical key.

    Each channel becomes ``floor(channel / (256/levels)) * (256/levels)``.
    Quantizing an already-quantized color at the same level is a no-op.

    Args:
        r, g, b: Channel values in 0-255
        levels: Grid steps per channel; must divide 256

    Returns:
        Canonical ``rgb(r,g,b)`` key
    """
    return format_color_key(quantize_rgb(r, g, b, levels))


def parse_color_key(key: str) -> RGB:
    """
    Parse a canonical color key back into channel values.

    Raises:
        MalformedColorKeyError: If the key is not of the form ``rgb(r,g,b)``
    """
    match = _KEY_PATTERN.match(key) if isinstance(key, str) else None
    if not match:
        raise MalformedColorKeyError(key)
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def color_distance(color1: RGB, color2: RGB) -> float:
    """Euclidean distance between two colors in raw RGB space."""
    dr = color1[0] - color2[0]
    dg = color1[1] - color2[1]
    db = color1[2] - color2[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def key_to_hex(key: str) -> str:
    """Convert a canonical color key to a #RRGGBB hex string."""
    r, g, b = parse_color_key(key)
    return f"#{r:02X}{g:02X}{b:02X}"
