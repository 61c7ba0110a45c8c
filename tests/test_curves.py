"""Tests for CurveComputer in curves.py.

Tests the sampled payload domain (including the clipped last sample), the
overhead and protocol flags handed to the airtime formula, catalog ordering,
stroke widths, determinism and the no-op on a non-positive maximum.
"""

import pytest

from conftest import DWELL_REGION, FAKE_DATA_RATES, PLAIN_REGION, fake_catalog

from pyairtimeqt.airtime import calculate_airtime
from pyairtimeqt.curves import CurveComputer
from pyairtimeqt.datarates import get_data_rates, get_region
from pyairtimeqt.models import (
    CodingRate,
    DataRateDescriptor,
    RadioMode,
)


def compute(computer, max_payload_size=247, overhead=5, region=PLAIN_REGION):
    return computer.compute(
        region,
        CodingRate.CR_4_5,
        12,
        125.0,
        RadioMode.LORA,
        overhead,
        max_payload_size,
    )


class TestCurveComputer:
    """Tests for CurveComputer.compute."""

    def test_one_series_per_data_rate_in_order(self, curve_computer):
        series = compute(curve_computer)
        assert [s.name for s in series] == ["DR0", "DR1", "DR2"]
        assert [s.color for s in series] == [dr.color for dr in FAKE_DATA_RATES]

    def test_visibility_unset(self, curve_computer):
        assert all(s.visibility is None for s in compute(curve_computer))

    def test_stroke_width_follows_highlight(self, curve_computer):
        assert [s.stroke_width for s in compute(curve_computer)] == [1.0, 1.0, 3.0]

    def test_domain_clipped_to_max(self, curve_computer):
        """Test that samples run every 10 bytes and end exactly at the maximum."""
        xs = compute(curve_computer)[0].x_data
        assert xs == tuple(range(0, 250, 10)) + (247,)
        assert xs[-2:] == (240, 247)

    def test_overhead_and_protocol_flags(self, curve_computer):
        """Test that every sample is evaluated at x + overhead with fixed flags."""
        series = compute(curve_computer, overhead=5)
        point = series[2].points[3]
        assert point.payload_size == 30
        assert point.airtime == calculate_airtime(
            35, 12, 125.0, CodingRate.CR_4_5, RadioMode.LORA, 8, True, False, True
        )

    def test_airtime_fn_receives_expected_arguments(self):
        calls = []

        def recording_airtime(*args):
            calls.append(args)
            return 1.0

        computer = CurveComputer(airtime_fn=recording_airtime, catalog_fn=fake_catalog)
        compute(computer, max_payload_size=20, overhead=5)
        assert calls[0] == (5, 12, 125.0, CodingRate.CR_4_5, RadioMode.LORA, 8, True, False, True)
        assert [c[0] for c in calls[:3]] == [5, 15, 25]

    def test_given_spreading_factor_and_bandwidth_used(self):
        """Test that every series uses the passed SF/BW, whatever the data rate defines."""
        series = CurveComputer().compute(
            get_region("EU868"), CodingRate.CR_4_5, 12, 125.0, RadioMode.LORA, 5, 10
        )
        expected = calculate_airtime(
            15, 12, 125.0, CodingRate.CR_4_5, RadioMode.LORA, 8, True, False, True
        )
        assert len(series) == 7
        assert all(s.points[-1].airtime == expected for s in series)

    def test_deterministic(self, curve_computer):
        assert compute(curve_computer) == compute(curve_computer)

    @pytest.mark.parametrize("max_payload_size", [0, -10])
    def test_non_positive_max_is_noop(self, curve_computer, max_payload_size):
        assert compute(curve_computer, max_payload_size=max_payload_size) == ()

    def test_dwell_region_does_not_change_curves(self, curve_computer):
        assert compute(curve_computer) == compute(curve_computer, region=DWELL_REGION)


class TestComputeForRegion:
    """End-to-end tests using the built-in catalog."""

    def test_eu868_domain(self):
        """Test that a 242 byte region spans 0..247 with a clipped last point."""
        region = get_region("EU868")
        series = CurveComputer().compute_for_region(region, CodingRate.CR_4_5)
        assert len(series) == len(get_data_rates(region))
        xs = series[0].x_data
        assert xs[0] == 0
        assert xs[-2:] == (240, 247)
        assert len(xs) == 26

    def test_slower_data_rates_take_longer(self):
        series = CurveComputer().compute_for_region(get_region("EU868"), CodingRate.CR_4_5)
        # DR0 (SF12) is slower than DR5 (SF7) at every payload size
        assert all(a > b for a, b in zip(series[0].y_data, series[5].y_data))

    def test_ism2400(self):
        series = CurveComputer().compute_for_region(get_region("ISM2400"), CodingRate.CR_4_8_LI)
        assert series[0].x_data[-1] == 253

    def test_data_rate_spreading_factor_used(self, curve_computer):
        """Test that each data rate is evaluated with its own spreading factor."""
        series = curve_computer.compute_for_region(PLAIN_REGION, CodingRate.CR_4_5)
        for s, dr in zip(series, FAKE_DATA_RATES):
            assert s.points[-1].airtime == calculate_airtime(
                252, dr.spreading_factor, 125.0, CodingRate.CR_4_5, RadioMode.LORA,
                8, True, False, True,
            )

    def test_region_values_used_as_fallback(self):
        """Test that data rates without their own SF/BW use the region's first ones."""
        descriptor = DataRateDescriptor(value=0, color="#000000")
        computer = CurveComputer(catalog_fn=lambda region: (descriptor,))
        series = computer.compute_for_region(PLAIN_REGION, CodingRate.CR_4_5)
        expected = calculate_airtime(
            252, 9, 125.0, CodingRate.CR_4_5, RadioMode.LORA, 8, True, False, True
        )
        assert series[0].points[-1].airtime == expected
