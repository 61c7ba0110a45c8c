from .models import (
    RadioMode,
    CodingRate,
    Highlight,
    Visibility,
    HorizontalMode,
    VerticalMode,
    RegionConfig,
    DataRateDescriptor,
    SeriesPoint,
    Series,
    DwellOverlay,
    AxisState,
    GraphSnapshot,
)
from .config import GraphConfig
from .airtime import calculate_airtime
from .datarates import REGIONS, get_region, get_data_rates

from .curves import CurveComputer
from .visibility import VisibilityTracker
from .axes import AxisLayoutManager
from .state import GraphState
from .plot_widget import AirtimeGraphWidget

__all__ = [
    # Models
    "RadioMode",
    "CodingRate",
    "Highlight",
    "Visibility",
    "HorizontalMode",
    "VerticalMode",
    "RegionConfig",
    "DataRateDescriptor",
    "SeriesPoint",
    "Series",
    "DwellOverlay",
    "AxisState",
    "GraphSnapshot",
    "GraphConfig",
    # Airtime formula + regions
    "calculate_airtime",
    "REGIONS",
    "get_region",
    "get_data_rates",
    # Engine
    "CurveComputer",
    "VisibilityTracker",
    "AxisLayoutManager",
    "GraphState",
    # Qt widget
    "AirtimeGraphWidget",
]
