"""Tests for numpy/matplotlib analysis of loaded series."""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from serieslog.accumulator import load_series
from serieslog.analysis import plot_series, summarize, to_array, to_arrays


@pytest.fixture
def loaded(scenario_a_file):
    return load_series(scenario_a_file)


class TestArrays:
    """Tests for array conversion."""

    def test_to_arrays_shapes(self, loaded):
        """Scalar series are 1-D, vector series are (n, 2)."""
        scalar, vector = loaded
        arrays = to_arrays({**scalar, **vector})
        assert arrays["t"].shape == (2,)
        assert arrays["p"].shape == (1, 2)
        assert arrays["t"].dtype == np.float64
        np.testing.assert_allclose(arrays["p"][0], [1.5, 2.3])

    def test_empty_vector_array(self):
        """An empty vector series keeps its second axis."""
        assert to_array([], 2).shape == (0, 2)
        assert to_array([], 1).shape == (0,)


class TestSummarize:
    """Tests for summary statistics."""

    def test_summaries(self, loaded):
        """Scalar stats are floats, vector stats are per-component tuples."""
        summaries = {s.name: s for s in summarize(*loaded)}
        t = summaries["t"]
        assert (t.dimension, t.count, t.mean, t.minimum, t.maximum) == (1, 2, 0.5, 0.0, 1.0)
        p = summaries["p"]
        assert p.dimension == 2
        assert p.mean == pytest.approx((1.5, 2.3))

    def test_empty_series(self):
        """Empty series have no statistics."""
        (summary,) = summarize({"t": []}, {})
        assert summary.count == 0
        assert summary.mean is None


class TestPlotSeries:
    """Tests for chart generation."""

    def test_plot_saves_png(self, loaded, temp_dir):
        """One visible subplot per series, saved to disk."""
        path = temp_dir / "chart.png"
        fig = plot_series(*loaded, save_path=str(path))
        assert path.exists()
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert len(visible) == 2

    def test_hides_unused_axes(self, temp_dir):
        """Odd series counts leave the spare subplot hidden."""
        fig = plot_series({"a": [1.0, 2.0], "b": [3.0], "c": [0.0]}, {})
        assert len(fig.axes) == 4
        assert sum(ax.get_visible() for ax in fig.axes) == 3

    def test_nothing_to_plot(self):
        """No series returns None."""
        assert plot_series({}, {}) is None
