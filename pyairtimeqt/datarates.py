"""Built-in regional frequency plans and their LoRa data rates.

Regions follow the LoRaWAN Regional Parameters (RP002-1.0.3) for the LoRa
modulated data rates; FSK and LR-FHSS data rates are not plotted.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .models import DataRateDescriptor, Highlight, RadioMode, RegionConfig

# One color per spreading factor, shared across regions
SF_COLORS: Dict[int, str] = {
    5: "#8c564b",
    6: "#e377c2",
    7: "#1f77b4",
    8: "#ff7f0e",
    9: "#2ca02c",
    10: "#d62728",
    11: "#9467bd",
    12: "#7f7f7f",
}


def _dr(value: int, sf: int, bw: float, highlight: Highlight = Highlight.NONE) -> DataRateDescriptor:
    return DataRateDescriptor(
        value=value,
        color=SF_COLORS[sf],
        highlight=highlight,
        spreading_factor=sf,
        bandwidth=bw,
    )


EU868 = RegionConfig(
    id="EU868",
    spreading_factors=(12, 11, 10, 9, 8, 7),
    bandwidths=(125.0, 250.0),
    max_mac_payload_size=242,
)

US915 = RegionConfig(
    id="US915",
    spreading_factors=(10, 9, 8, 7),
    bandwidths=(125.0, 500.0),
    max_mac_payload_size=242,
    max_dwell_time=400.0,
)

AU915 = RegionConfig(
    id="AU915",
    spreading_factors=(12, 11, 10, 9, 8, 7),
    bandwidths=(125.0, 500.0),
    max_mac_payload_size=242,
)

AS923 = RegionConfig(
    id="AS923",
    spreading_factors=(12, 11, 10, 9, 8, 7),
    bandwidths=(125.0, 250.0),
    max_mac_payload_size=242,
    max_dwell_time=400.0,
)

IN865 = RegionConfig(
    id="IN865",
    spreading_factors=(12, 11, 10, 9, 8, 7),
    bandwidths=(125.0,),
    max_mac_payload_size=242,
)

ISM2400 = RegionConfig(
    id="ISM2400",
    spreading_factors=(12, 11, 10, 9, 8, 7, 6, 5),
    bandwidths=(812.5,),
    radio_mode=RadioMode.LORA_2G4,
    max_mac_payload_size=248,
)

REGIONS: Dict[str, RegionConfig] = {
    r.id: r for r in (EU868, US915, AU915, AS923, IN865, ISM2400)
}

_DATA_RATES: Dict[str, Tuple[DataRateDescriptor, ...]] = {
    "EU868": (
        _dr(0, 12, 125.0, Highlight.LOW),
        _dr(1, 11, 125.0, Highlight.LOW),
        _dr(2, 10, 125.0),
        _dr(3, 9, 125.0),
        _dr(4, 8, 125.0),
        _dr(5, 7, 125.0, Highlight.HIGH),
        _dr(6, 7, 250.0, Highlight.LOW),
    ),
    "US915": (
        _dr(0, 10, 125.0, Highlight.HIGH),
        _dr(1, 9, 125.0),
        _dr(2, 8, 125.0),
        _dr(3, 7, 125.0),
        _dr(4, 8, 500.0, Highlight.LOW),
    ),
    "AU915": (
        _dr(0, 12, 125.0, Highlight.LOW),
        _dr(1, 11, 125.0, Highlight.LOW),
        _dr(2, 10, 125.0),
        _dr(3, 9, 125.0),
        _dr(4, 8, 125.0),
        _dr(5, 7, 125.0, Highlight.HIGH),
        _dr(6, 8, 500.0, Highlight.LOW),
    ),
    "AS923": (
        _dr(0, 12, 125.0, Highlight.LOW),
        _dr(1, 11, 125.0, Highlight.LOW),
        _dr(2, 10, 125.0, Highlight.HIGH),
        _dr(3, 9, 125.0),
        _dr(4, 8, 125.0),
        _dr(5, 7, 125.0),
        _dr(6, 7, 250.0, Highlight.LOW),
    ),
    "IN865": (
        _dr(0, 12, 125.0, Highlight.LOW),
        _dr(1, 11, 125.0, Highlight.LOW),
        _dr(2, 10, 125.0),
        _dr(3, 9, 125.0),
        _dr(4, 8, 125.0),
        _dr(5, 7, 125.0, Highlight.HIGH),
    ),
    "ISM2400": (
        _dr(0, 12, 812.5, Highlight.LOW),
        _dr(1, 11, 812.5, Highlight.LOW),
        _dr(2, 10, 812.5),
        _dr(3, 9, 812.5),
        _dr(4, 8, 812.5),
        _dr(5, 7, 812.5, Highlight.HIGH),
        _dr(6, 6, 812.5),
        _dr(7, 5, 812.5, Highlight.LOW),
    ),
}


def get_region(region_id: str) -> RegionConfig:
    """Look up a built-in region by identifier.

    Raises:
        ValueError: If the region is unknown.
    """
    try:
        return REGIONS[region_id]
    except KeyError:
        raise ValueError(
            f"Unknown region: '{region_id}'. Known regions: {', '.join(REGIONS)}"
        ) from None


def get_data_rates(region: RegionConfig) -> Tuple[DataRateDescriptor, ...]:
    """Return the LoRa data rates of a region, in data rate order.

    Raises:
        ValueError: If the region is not one of the built-in regions.
    """
    try:
        return _DATA_RATES[region.id]
    except KeyError:
        raise ValueError(f"No data rates known for region '{region.id}'") from None
