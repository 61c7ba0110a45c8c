"""Tests for VisibilityTracker in visibility.py.

Tests configured defaults, reset detection by value, carrying previous
visibility forward and the fallback when the catalog grew.
"""

from dataclasses import replace

from conftest import DWELL_REGION, FAKE_DATA_RATES, PLAIN_REGION

from pyairtimeqt.models import CodingRate, Series, SeriesPoint, Visibility
from pyairtimeqt.visibility import VisibilityTracker

A, B, C = FAKE_DATA_RATES
VISIBLE = Visibility.VISIBLE
LEGEND_ONLY = Visibility.LEGEND_ONLY


def make_series(descriptor, visibility=None):
    return Series(
        name=descriptor.name,
        points=(SeriesPoint(0, 1.0),),
        color=descriptor.color,
        visibility=visibility,
    )


class TestResolve:
    """Tests for VisibilityTracker.resolve."""

    def test_defaults(self):
        tracker = VisibilityTracker()
        assert tracker.resolve(A, None, False) is VISIBLE
        assert tracker.resolve(B, None, False) is LEGEND_ONLY
        assert tracker.resolve(C, None, False) is VISIBLE

    def test_previous_visibility_kept(self):
        tracker = VisibilityTracker()
        assert tracker.resolve(A, make_series(A, LEGEND_ONLY), False) is LEGEND_ONLY
        assert tracker.resolve(B, make_series(B, VISIBLE), False) is VISIBLE

    def test_reset_discards_previous(self):
        tracker = VisibilityTracker()
        assert tracker.resolve(A, make_series(A, LEGEND_ONLY), True) is VISIBLE
        assert tracker.resolve(B, make_series(B, VISIBLE), True) is LEGEND_ONLY

    def test_unset_previous_uses_default(self):
        assert VisibilityTracker().resolve(B, make_series(B), False) is LEGEND_ONLY


class TestResetTriggered:
    """Tests for VisibilityTracker.reset_triggered."""

    def test_first_configuration(self):
        assert VisibilityTracker.reset_triggered(None, (PLAIN_REGION, CodingRate.CR_4_5))

    def test_same_configuration(self):
        cfg = (PLAIN_REGION, CodingRate.CR_4_5)
        assert not VisibilityTracker.reset_triggered(cfg, cfg)

    def test_equal_by_value(self):
        """Test that an equal but distinct region does not reset."""
        copy = replace(PLAIN_REGION)
        assert copy is not PLAIN_REGION
        assert not VisibilityTracker.reset_triggered(
            (PLAIN_REGION, CodingRate.CR_4_5), (copy, CodingRate.CR_4_5)
        )

    def test_coding_rate_change(self):
        assert VisibilityTracker.reset_triggered(
            (PLAIN_REGION, CodingRate.CR_4_5), (PLAIN_REGION, CodingRate.CR_4_6)
        )

    def test_region_change(self):
        assert VisibilityTracker.reset_triggered(
            (PLAIN_REGION, CodingRate.CR_4_5), (DWELL_REGION, CodingRate.CR_4_5)
        )


class TestMerge:
    """Tests for VisibilityTracker.merge."""

    def test_merge_preserves_previous(self):
        previous = (make_series(A, VISIBLE), make_series(B, LEGEND_ONLY), make_series(C, VISIBLE))
        fresh = tuple(make_series(d) for d in FAKE_DATA_RATES)
        merged = VisibilityTracker().merge(FAKE_DATA_RATES, fresh, previous, False)
        assert [s.visibility for s in merged] == [VISIBLE, LEGEND_ONLY, VISIBLE]

    def test_merge_does_not_mutate_inputs(self):
        fresh = tuple(make_series(d) for d in FAKE_DATA_RATES)
        VisibilityTracker().merge(FAKE_DATA_RATES, fresh, (), True)
        assert all(s.visibility is None for s in fresh)

    def test_catalog_grew(self):
        """Test that series beyond the previous snapshot fall back to defaults."""
        previous = (make_series(A, LEGEND_ONLY),)
        fresh = tuple(make_series(d) for d in FAKE_DATA_RATES)
        merged = VisibilityTracker().merge(FAKE_DATA_RATES, fresh, previous, False)
        assert [s.visibility for s in merged] == [LEGEND_ONLY, LEGEND_ONLY, VISIBLE]
