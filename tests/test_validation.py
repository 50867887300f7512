"""
Tests for output validation: byte statistics, pi estimate and plots.
"""

import math

import pytest

from randsym.symbols import SymbolCategory
from randsym.validation import (
    byte_statistics,
    category_proportions,
    classify_symbol,
    create_bitmap_plot,
    create_histogram_plot,
    estimate_pi,
    outlier_bins,
)


class TestByteStatistics:
    """Test distribution summaries."""

    def test_perfectly_uniform(self):
        stats = byte_statistics(bytes(range(256)) * 4)
        assert stats.size == 1024
        assert stats.mean == 127.5
        assert stats.entropy == pytest.approx(8.0)
        assert stats.chi_squared == 0.0
        assert stats.efficiency == pytest.approx(1.0)
        assert stats.looks_uniform

    def test_constant_data(self):
        stats = byte_statistics(bytes([7]) * 512)
        assert stats.entropy == pytest.approx(0.0)
        assert stats.std == 0.0
        assert not stats.looks_uniform

    def test_random_data_looks_uniform(self, core):
        data = core.uniform_uint32_sequence(16384).tobytes()
        stats = byte_statistics(data)
        assert stats.entropy > 7.99
        assert abs(stats.mean - 127.5) < 2.0

    def test_empty(self):
        with pytest.raises(ValueError):
            byte_statistics(b'')


class TestEstimatePi:
    """Test the Monte Carlo check on random_float."""

    def test_close_to_pi(self, core):
        assert abs(estimate_pi(core, 20000) - math.pi) < 0.1

    def test_batches_stay_within_limit(self, make_core):
        core = make_core((0, 0))
        assert estimate_pi(core, 5000) == 4.0
        assert max(core.source.requests) <= 8192

    def test_requires_points(self, core):
        with pytest.raises(ValueError):
            estimate_pi(core, 0)


class TestCategories:
    """Test symbol classification."""

    @pytest.mark.parametrize('char, category', [
        ('5', SymbolCategory.DIGIT),
        ('q', SymbolCategory.LOWER_LETTER),
        ('Q', SymbolCategory.UPPER_LETTER),
        ('~', SymbolCategory.SPECIAL_SYMBOL),
    ])
    def test_classify(self, char, category):
        assert classify_symbol(char) == category

    def test_classify_rejects_unknown(self):
        with pytest.raises(ValueError):
            classify_symbol('"')

    def test_proportions(self):
        proportions = category_proportions(['1', 'a', 'B', '@', '2', 'c', 'D', '#'])
        assert all(share == 0.25 for share in proportions.values())

    def test_proportions_empty(self):
        with pytest.raises(ValueError):
            category_proportions([])


class TestPlots:
    """Test PNG output."""

    def test_histogram(self, tmp_path):
        pytest.importorskip('matplotlib')
        path = tmp_path / 'histogram.png'
        assert create_histogram_plot(bytes(range(256)) * 8, str(path))
        assert path.stat().st_size > 0

    def test_bitmap(self, tmp_path):
        pytest.importorskip('matplotlib')
        path = tmp_path / 'bitmap.png'
        assert create_bitmap_plot(bytes(range(256)) * 16, str(path))
        assert path.stat().st_size > 0

    def test_bitmap_empty(self, tmp_path):
        pytest.importorskip('matplotlib')
        with pytest.raises(ValueError):
            create_bitmap_plot(b'', str(tmp_path / 'empty.png'))


class TestOutlierBins:
    """Test detection of over- and under-represented byte values."""

    def test_uniform_has_none(self):
        assert outlier_bins(bytes(range(256)) * 8).size == 0

    def test_skewed_bin_flagged(self):
        data = bytes(range(256)) * 8 + bytes([0]) * 400
        assert 0 in outlier_bins(data).tolist()
