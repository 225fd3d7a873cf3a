"""
Test configuration and fixtures for palette analysis tests.
"""
import numpy as np
import pytest


def striped_raster(stripes, width=100, alpha=255):
    """
    Build an (height, width, 4) uint8 raster of horizontal color stripes.

    Args:
        stripes: List of ((r, g, b), row_count) in top-to-bottom order
    """
    rows = []
    for rgb, row_count in stripes:
        band = np.zeros((row_count, width, 4), dtype=np.uint8)
        band[:, :, :3] = rgb
        band[:, :, 3] = alpha
        rows.append(band)
    return np.concatenate(rows, axis=0)


@pytest.fixture
def make_raster():
    """Factory fixture for striped rasters."""
    return striped_raster


@pytest.fixture
def rule_raster():
    """100×100 raster split 60/30/10 between red, green and blue."""
    return striped_raster([
        ((200, 40, 40), 60),
        ((40, 200, 40), 30),
        ((40, 40, 200), 10),
    ])


@pytest.fixture
def mono_raster():
    """10×10 raster of a single opaque color."""
    return striped_raster([((200, 50, 50), 10)], width=10)


@pytest.fixture
def transparent_raster():
    """20×20 raster with every pixel below the alpha threshold."""
    return striped_raster([((10, 200, 90), 20)], width=20, alpha=127)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palette_rule.services.observability import get_metrics_collector
    get_metrics_collector().reset()
