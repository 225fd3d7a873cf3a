"""
Pixel sampling and frequency aggregation.

Turns a decoded RGBA buffer into a first-seen-ordered mapping of 16-level
quantized color keys to sample counts.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
from loguru import logger

from ...errors import PixelBufferError
from .quantization import BUCKET_LEVELS, quantize

ALPHA_THRESHOLD = 128  # samples with alpha below this are discarded
SAMPLE_GRID = 100      # sampling targets roughly SAMPLE_GRID**2 visits


@dataclass
class FrequencyTable:
    """Quantized color counts for one sampled image."""
    counts: Dict[str, int] = field(default_factory=dict)
    total_pixels: int = 0
    stride: int = 1
    opaque_samples: int = 0

    @property
    def sampled_population(self) -> float:
        """Percentage denominator: every visited pixel, transparent or not."""
        return self.total_pixels / self.stride

    @property
    def total_colors(self) -> int:
        return len(self.counts)


def normalize_pixel_buffer(pixels, width: Optional[int] = None,
                           height: Optional[int] = None) -> Tuple[np.ndarray, int, int]:
    """
    Validate a decoded RGBA raster and flatten it to shape (N, 4) uint8.

    Accepts a flat row-major sequence of ``width*height*4`` channel values
    (bytes, list, 1-D array), an ``(N, 4)`` sequence or iterator of RGBA
    tuples, or an ``(height, width, 4)`` array whose dimensions are inferred.

    Raises:
        PixelBufferError: If the buffer shape, dimensions or values are invalid
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(pixels, dtype=np.uint8)
    elif not hasattr(pixels, "__len__"):
        arr = np.asarray(list(pixels))
    else:
        arr = np.asarray(pixels)

    if arr.ndim == 3:
        if arr.shape[2] != 4:
            raise PixelBufferError(f"Expected 4 channels (RGBA), got {arr.shape[2]}")
        h, w = arr.shape[:2]
        if (width is not None and width != w) or (height is not None and height != h):
            raise PixelBufferError(
                f"Dimension mismatch: buffer is {w}×{h}, caller passed {width}×{height}"
            )
        width, height = w, h

    if width is None or height is None:
        raise PixelBufferError("width and height are required for flat pixel buffers")
    if width < 0 or height < 0:
        raise PixelBufferError(f"Invalid dimensions {width}×{height}")

    expected = width * height
    if arr.size == 0 and expected == 0:
        return np.empty((0, 4), dtype=np.uint8), width, height

    if arr.ndim == 1:
        if arr.size != expected * 4:
            raise PixelBufferError(
                f"Buffer holds {arr.size} values, expected {expected * 4} for {width}×{height} RGBA"
            )
    elif arr.ndim == 2:
        if arr.shape[1] != 4:
            raise PixelBufferError(f"Expected RGBA tuples, got rows of {arr.shape[1]} values")
        if arr.shape[0] != expected:
            raise PixelBufferError(
                f"Buffer holds {arr.shape[0]} pixels, expected {expected} for {width}×{height}"
            )
    elif arr.ndim != 3:
        raise PixelBufferError(f"Unsupported pixel buffer with {arr.ndim} dimensions")

    if not np.issubdtype(arr.dtype, np.integer):
        raise PixelBufferError(f"Channel values must be integers, got dtype {arr.dtype}")
    if arr.dtype != np.uint8 and (arr.min() < 0 or arr.max() > 255):
        raise PixelBufferError("Channel values must lie in 0-255")

    return arr.astype(np.uint8, copy=False).reshape(-1, 4), width, height


def compute_stride(total_pixels: int) -> int:
    """Sampling stride: ``max(1, floor(sqrt(total_pixels) / SAMPLE_GRID))``."""
    return max(1, int(math.floor(math.sqrt(total_pixels) / SAMPLE_GRID)))


def sample_opaque_pixels(rgba: np.ndarray, stride: int) -> np.ndarray:
    """
    Visit every ``stride``-th pixel and keep the opaque ones.

    Args:
        rgba: Pixels as (N, 4) uint8
        stride: Sampling stride from ``compute_stride``

    Returns:
        RGB channels of the kept samples, (M, 3) uint8, in visiting order
    """
    visited = rgba[::stride]
    opaque = visited[visited[:, 3] >= ALPHA_THRESHOLD]
    logger.debug(f"Visited {len(visited)} pixels (stride={stride}), {len(opaque)} opaque")
    return opaque[:, :3]


def build_frequency_table(pixels, width: Optional[int] = None,
                          height: Optional[int] = None) -> FrequencyTable:
    """
    Sample a raster and count samples per 16-level quantized color.

    The returned counts keep first-seen order, which the cluster merger
    depends on for reproducible output.
    """
    rgba, width, height = normalize_pixel_buffer(pixels, width, height)
    total_pixels = width * height
    stride = compute_stride(total_pixels)

    samples = sample_opaque_pixels(rgba, stride)
    counts = Counter(quantize(r, g, b, BUCKET_LEVELS) for r, g, b in samples.tolist())

    table = FrequencyTable(
        counts=dict(counts),
        total_pixels=total_pixels,
        stride=stride,
        opaque_samples=len(samples),
    )
    logger.info(f"Sampled {table.opaque_samples} opaque pixels into {table.total_colors} color buckets")
    return table
