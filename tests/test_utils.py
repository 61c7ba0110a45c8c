"""Tests for utility functions in utils.py.

Tests sample_range inclusive end clipping, empty and invalid ranges, and
to_logarithmic in both directions.
"""

import math

import pytest

from pyairtimeqt.utils import sample_range, to_logarithmic


class TestSampleRange:
    """Tests for sample_range function."""

    def test_end_not_multiple_of_step(self):
        """Test that the last sample is clipped to the exact end."""
        values = sample_range(0, 247, 10)
        assert values[:3] == (0, 10, 20)
        assert values[-2:] == (240, 247)
        assert len(values) == 26

    def test_end_multiple_of_step(self):
        """Test that an end on the stride is not duplicated."""
        assert sample_range(0, 30, 10) == (0, 10, 20, 30)

    def test_returns_python_ints(self):
        """Test that numpy integers are converted."""
        assert all(type(v) is int for v in sample_range(0, 25, 10))

    def test_end_equals_start(self):
        assert sample_range(0, 0, 10) == (0,)

    def test_end_before_start(self):
        assert sample_range(10, 0, 10) == ()

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            sample_range(0, 10, 0)


class TestToLogarithmic:
    """Tests for to_logarithmic function."""

    def test_linear_is_identity(self):
        assert to_logarithmic(False, 500.0) == 500.0

    def test_logarithmic(self):
        assert to_logarithmic(True, 500.0) == pytest.approx(math.log10(500.0))
        assert to_logarithmic(True, 1000.0) == pytest.approx(3.0)
