"""
End-to-end tests for the palette analysis pipeline.

Tests the full chain on synthetic rasters:
- exact 60/30/10 scenario
- near-duplicate merging before ranking
- monochrome and fully transparent images
- determinism and the percentage sum invariant
"""

import numpy as np
import pytest

from palette_rule.errors import PixelBufferError
from palette_rule.services.colors import (
    analyze_image_colors, extract_palette_report, check_design_rule
)


class TestRuleScenario:
    """Test a raster painted exactly 60/30/10"""

    def test_ranked_colors(self, rule_raster):
        result = analyze_image_colors(rule_raster)

        assert [c.color for c in result.colors] == [
            "rgb(192,32,32)", "rgb(32,192,32)", "rgb(32,32,192)"
        ]
        assert [c.percentage for c in result.colors] == pytest.approx([60.0, 30.0, 10.0])
        assert result.total_colors == 3
        assert result.cluster_count == 3
        assert result.stride == 1
        assert result.sampled_population == 10_000.0
        assert check_design_rule(result.colors) is True

    def test_flat_buffer_matches_array(self, rule_raster):
        flat = rule_raster.reshape(-1).tolist()
        assert analyze_image_colors(flat, 100, 100) == analyze_image_colors(rule_raster)

    def test_bytes_buffer(self, rule_raster):
        result = analyze_image_colors(rule_raster.tobytes(), width=100, height=100)
        assert check_design_rule(result.colors) is True

    def test_report(self, rule_raster):
        report = extract_palette_report(rule_raster)
        assert report.rule.follows_rule is True
        assert report.analysis.colors[0].hex == "#C02020"
        assert [s.within_margin for s in report.rule.slots] == [True, True, True]


class TestMergeScenario:
    """Test that near-duplicate shades count as one dominant color"""

    def test_shades_merge_into_primary(self, make_raster):
        raster = make_raster([
            ((200, 40, 40), 50),
            ((215, 40, 40), 10),
            ((40, 200, 40), 30),
            ((40, 40, 200), 10),
        ])
        result = analyze_image_colors(raster)

        assert result.total_colors == 4
        assert result.cluster_count == 3
        assert result.colors_grouped is True
        assert result.colors[0].color == "rgb(192,32,32)"
        assert [c.percentage for c in result.colors] == pytest.approx([60.0, 30.0, 10.0])
        assert check_design_rule(result.colors) is True

    def test_minor_colors_excluded_then_rescaled(self, make_raster):
        raster = make_raster([
            ((200, 40, 40), 50),
            ((40, 200, 40), 25),
            ((40, 40, 200), 15),
            ((250, 250, 250), 10),
        ])
        result = analyze_image_colors(raster)

        assert result.cluster_count == 4
        assert len(result.colors) == 3
        # 50/25/15 of 100 rescaled over 90
        assert [c.percentage for c in result.colors] == pytest.approx(
            [500 / 9, 250 / 9, 150 / 9]
        )
        assert sum(c.percentage for c in result.colors) == pytest.approx(100.0, abs=1e-6)


class TestSparseImages:
    """Test monochrome and transparent rasters"""

    def test_monochrome(self, mono_raster):
        result = analyze_image_colors(mono_raster)
        assert result.cluster_count == 1
        assert len(result.colors) == 1
        assert result.colors[0].color == "rgb(192,48,48)"
        assert result.colors[0].percentage == pytest.approx(100.0)
        assert check_design_rule(result.colors) is False

    def test_fully_transparent(self, transparent_raster):
        result = analyze_image_colors(transparent_raster)
        assert result.colors == []
        assert result.total_colors == 0
        assert result.opaque_samples == 0
        assert check_design_rule(result.colors) is False

    def test_fully_transparent_report(self, transparent_raster):
        report = extract_palette_report(transparent_raster)
        assert report.rule.follows_rule is False
        assert report.rule.slots == []

    def test_empty_raster(self):
        result = analyze_image_colors([], 0, 0)
        assert result.colors == []
        assert result.total_pixels == 0

    def test_invalid_buffer_raises(self):
        with pytest.raises(PixelBufferError):
            analyze_image_colors([0, 0, 0], 1, 1)


class TestProperties:
    """Test determinism and the percentage sum invariant on noisy rasters"""

    @pytest.mark.parametrize("seed", [0, 7, 42])
    def test_deterministic(self, seed):
        rng = np.random.default_rng(seed)
        raster = rng.integers(0, 256, size=(40, 50, 4), dtype=np.uint8)
        first = analyze_image_colors(raster)
        second = analyze_image_colors(raster.copy())
        assert first.model_dump() == second.model_dump()

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_percentages_sum_to_hundred(self, seed):
        rng = np.random.default_rng(seed)
        raster = rng.integers(0, 256, size=(50, 60, 4), dtype=np.uint8)
        result = analyze_image_colors(raster)

        assert 0 < len(result.colors) <= 3
        assert sum(c.percentage for c in result.colors) == pytest.approx(100.0, abs=1e-6)
        percentages = [c.percentage for c in result.colors]
        assert percentages == sorted(percentages, reverse=True)

    def test_input_not_mutated(self, rule_raster):
        before = rule_raster.copy()
        analyze_image_colors(rule_raster)
        np.testing.assert_array_equal(rule_raster, before)
