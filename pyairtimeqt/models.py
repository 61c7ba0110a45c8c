"""Data models for the airtime graph.

Frozen dataclasses and enums describing regions, data rates, plotted series
and the render-ready snapshot handed to the plot widget. Every model is
immutable: state changes always produce new instances.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class RadioMode(enum.Enum):
    """LoRa modulation family used by a region."""

    LORA = "LoRa"
    LORA_2G4 = "LoRa 2.4GHz"


class CodingRate(enum.Enum):
    """LoRa forward error correction scheme.

    The ``_LI`` variants are the long-interleaving rates of the 2.4 GHz radios.
    """

    CR_4_5 = "4/5"
    CR_4_6 = "4/6"
    CR_4_7 = "4/7"
    CR_4_8 = "4/8"
    CR_4_5_LI = "4/5LI"
    CR_4_6_LI = "4/6LI"
    CR_4_8_LI = "4/8LI"

    @property
    def long_interleaving(self) -> bool:
        return self.value.endswith("LI")

    @property
    def cr(self) -> int:
        """Coding rate index, 1..4 for 4/5..4/8."""
        return int(self.value[2]) - 4


class Highlight(enum.Enum):
    """How prominently a data rate is drawn by default."""

    NONE = "none"
    LOW = "low"
    HIGH = "high"


class Visibility(enum.Enum):
    VISIBLE = "visible"
    LEGEND_ONLY = "legendonly"


class HorizontalMode(enum.Enum):
    FIT_ALL = "fit_all"
    FIXED_SCALE = "fixed_scale"


class VerticalMode(enum.Enum):
    LINEAR = "linear"
    LOGARITHMIC = "log"


@dataclass(frozen=True)
class RegionConfig:
    """Radio parameters of a regional frequency plan.

    Attributes:
        id: Region identifier, e.g. ``"EU868"``.
        spreading_factors: Supported spreading factors, in catalog order.
        bandwidths: Supported bandwidths in kHz.
        radio_mode: Modulation family.
        max_mac_payload_size: Largest MACPayload allowed, in bytes.
        max_dwell_time: Regulatory dwell time limit in ms, if any.
    """

    id: str
    spreading_factors: Tuple[int, ...]
    bandwidths: Tuple[float, ...]
    radio_mode: RadioMode = RadioMode.LORA
    max_mac_payload_size: int = 242
    max_dwell_time: Optional[float] = None


@dataclass(frozen=True)
class DataRateDescriptor:
    """A data rate offered by a region.

    ``spreading_factor`` and ``bandwidth`` are optional. When plotting a
    region's full range they select the data rate's own curve; when omitted
    the region's first spreading factor and bandwidth are used.
    """

    value: int
    color: str
    highlight: Highlight = Highlight.NONE
    spreading_factor: Optional[int] = None
    bandwidth: Optional[float] = None

    @property
    def name(self) -> str:
        return f"DR{self.value}"


@dataclass(frozen=True)
class SeriesPoint:
    payload_size: int
    airtime: float


@dataclass(frozen=True)
class Series:
    """One airtime curve, ordered by ascending payload size."""

    name: str
    points: Tuple[SeriesPoint, ...]
    color: str
    stroke_width: float = 1.0
    visibility: Optional[Visibility] = None  # None until resolved

    @property
    def x_data(self) -> Tuple[int, ...]:
        return tuple(p.payload_size for p in self.points)

    @property
    def y_data(self) -> Tuple[float, ...]:
        return tuple(p.airtime for p in self.points)

    @property
    def visible(self) -> bool:
        return self.visibility is Visibility.VISIBLE


@dataclass(frozen=True)
class DwellOverlay:
    """Horizontal dwell time reference line and its label.

    ``threshold`` is the dwell time limit itself and never changes;
    ``display_y`` is where the line and label are drawn under the current
    vertical scale.
    """

    threshold: float
    display_y: float
    label: str = "max dwell time"


@dataclass(frozen=True)
class AxisState:
    """Axis configuration of the plot."""

    horizontal_mode: HorizontalMode = HorizontalMode.FIT_ALL
    vertical_mode: VerticalMode = VerticalMode.LINEAR
    horizontal_range: Optional[Tuple[float, float]] = None
    dwell_overlay: Optional[DwellOverlay] = None

    @property
    def fit_all(self) -> bool:
        return self.horizontal_mode is HorizontalMode.FIT_ALL

    @property
    def y_log(self) -> bool:
        return self.vertical_mode is VerticalMode.LOGARITHMIC


@dataclass(frozen=True)
class GraphSnapshot:
    """Render-ready state of the graph.

    A snapshot with a higher ``revision`` replaces any previous one wholesale.
    """

    series: Tuple[Series, ...] = ()
    axis_state: AxisState = AxisState()
    revision: int = 0
    data_domain: Optional[Tuple[int, int]] = None
