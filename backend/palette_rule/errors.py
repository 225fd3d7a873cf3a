"""
Palette Rule error types.
"""


class PaletteAnalysisError(Exception):
    """Base class for palette analysis failures."""


class MalformedColorKeyError(PaletteAnalysisError, ValueError):
    """A quantized color key could not be parsed back into channel values."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid color key: {key!r} (expected 'rgb(r,g,b)')")


class PixelBufferError(PaletteAnalysisError, ValueError):
    """The supplied pixel buffer does not describe a valid RGBA raster."""
