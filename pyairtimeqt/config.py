"""Configuration for the airtime graph.

Provides a frozen dataclass holding the sampling, layout and styling constants
used by the curve computation, the axis layout and the plot widget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GraphConfig:
    """Tunable constants of the graph.

    Attributes:
        sample_step: Payload size stride between curve samples, in bytes.
        overhead_bytes: Fixed protocol bytes added on top of the MACPayload.
        chrome_width: Horizontal pixels taken by margins and legend, excluded
            from the fixed-scale computation.
        pixels_per_byte: Horizontal scale used in fixed-scale mode.
        preamble_length: Preamble symbols passed to the airtime formula.
        explicit_header: Whether frames carry an explicit LoRa header.
        low_data_rate_optimize: Low data rate optimization flag.
        crc: Whether the payload CRC is enabled.
        initial_horizontal_range: Range shown before any data is plotted.
    """

    sample_step: int = 10
    overhead_bytes: int = 5
    chrome_width: int = 312  # 970 - 658
    pixels_per_byte: float = 6.0
    preamble_length: int = 8
    explicit_header: bool = True
    low_data_rate_optimize: bool = False
    crc: bool = True
    initial_horizontal_range: Tuple[float, float] = (0.0, 100.0)

    x_title: str = "PHYPayload Size (bytes)"
    y_title_linear: str = "airtime (ms)"
    y_title_log: str = "airtime (ms, logarithmic)"

    dwell_label: str = "max dwell time"
    dwell_color: str = "red"
    dwell_line_alpha: float = 0.2
    dwell_label_alpha: float = 0.4

    plot_height: int = 400
    background_color: str = "w"

    hover_template: str = "PHYPayload: {x}B\nAirtime: {y:g}ms"
    y_headroom: float = 0.05  # fraction above the highest visible sample, linear scale
