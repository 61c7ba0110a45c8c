"""Pytest configuration and shared fixtures.

Runs Qt offscreen so the widget tests work without a display, and provides a
small three data rate catalog used by the engine tests:

  DR0: highlight none  -> visible by default
  DR1: highlight low   -> legend only by default
  DR2: highlight high  -> visible by default, thick stroke
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from pyairtimeqt.config import GraphConfig
from pyairtimeqt.curves import CurveComputer
from pyairtimeqt.models import (
    CodingRate,
    DataRateDescriptor,
    Highlight,
    RegionConfig,
)
from pyairtimeqt.state import GraphState

PLAIN_REGION = RegionConfig(
    id="TEST",
    spreading_factors=(9, 8, 7),
    bandwidths=(125.0,),
    max_mac_payload_size=242,
)

DWELL_REGION = RegionConfig(
    id="TEST-DWELL",
    spreading_factors=(9, 8, 7),
    bandwidths=(125.0,),
    max_mac_payload_size=242,
    max_dwell_time=500.0,
)

FAKE_DATA_RATES = (
    DataRateDescriptor(value=0, color="#1f77b4", highlight=Highlight.NONE, spreading_factor=9),
    DataRateDescriptor(value=1, color="#ff7f0e", highlight=Highlight.LOW, spreading_factor=8),
    DataRateDescriptor(value=2, color="#2ca02c", highlight=Highlight.HIGH, spreading_factor=7),
)


def fake_catalog(region):
    """Same three data rates for every region."""
    return FAKE_DATA_RATES


@pytest.fixture
def config():
    return GraphConfig()


@pytest.fixture
def curve_computer(config):
    return CurveComputer(config, catalog_fn=fake_catalog)


@pytest.fixture
def make_state(qapp, curve_computer):
    """Factory for GraphState instances using the fake catalog."""
    created = []

    def _make(region=PLAIN_REGION, coding_rate=CodingRate.CR_4_5, packet_size=None):
        state = GraphState(
            region=region,
            coding_rate=coding_rate,
            packet_size=packet_size,
            curve_computer=curve_computer,
        )
        created.append(state)
        return state

    yield _make
    created.clear()


@pytest.fixture
def revisions():
    """Collects the revision of every snapshot a state publishes."""
    seen = []

    def _connect(state):
        state.snapshotChanged.connect(lambda snapshot: seen.append(snapshot.revision))
        return seen

    return _connect
