"""Axis layout state transitions.

Two independent two-state axes drive the plot layout:

  - horizontal: fit all payload sizes, or a fixed pixels-per-byte scale
    derived from the viewport width
  - vertical: linear or logarithmic airtime scale

The dwell time overlay is derived state: it follows the current region and is
re-projected whenever the vertical scale changes.

All transitions are pure. They take an AxisState and return a new one, or the
very same instance when nothing changed, so callers can detect no-ops with
``is``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from .config import GraphConfig
from .models import AxisState, DwellOverlay, HorizontalMode, VerticalMode
from .utils import to_logarithmic

logger = logging.getLogger(__name__)


class AxisLayoutManager:
    """Derives axis configuration and overlay geometry from the axis modes."""

    def __init__(self, config: Optional[GraphConfig] = None) -> None:
        self._config = config or GraphConfig()

    def initial_state(self) -> AxisState:
        return AxisState(horizontal_range=self._config.initial_horizontal_range)

    # ------------------------------------------------------------------
    # Horizontal axis
    # ------------------------------------------------------------------

    def fixed_scale_range(self, viewport_width: float) -> Tuple[float, float]:
        """Horizontal range showing a fixed number of pixels per byte."""
        cfg = self._config
        upper = (viewport_width - cfg.chrome_width) / cfg.pixels_per_byte
        return (0.0, max(0.0, upper))

    def layout_horizontal(
        self, state: AxisState, mode: HorizontalMode, viewport_width: float
    ) -> AxisState:
        """Apply a horizontal mode for the given viewport width.

        In fit-all mode the renderer auto-ranges on the data; an existing
        explicit range is kept as fallback. In fixed-scale mode the range is
        recomputed from the viewport width.
        """
        fixed = self.fixed_scale_range(viewport_width)
        if mode is HorizontalMode.FIT_ALL:
            x_range = state.horizontal_range if state.horizontal_range is not None else fixed
        else:
            x_range = fixed

        if mode is state.horizontal_mode and x_range == state.horizontal_range:
            return state
        return replace(state, horizontal_mode=mode, horizontal_range=x_range)

    def toggle_horizontal(self, state: AxisState, viewport_width: float) -> AxisState:
        mode = (
            HorizontalMode.FIXED_SCALE
            if state.horizontal_mode is HorizontalMode.FIT_ALL
            else HorizontalMode.FIT_ALL
        )
        return self.layout_horizontal(state, mode, viewport_width)

    def set_viewport_width(self, state: AxisState, viewport_width: float) -> AxisState:
        return self.layout_horizontal(state, state.horizontal_mode, viewport_width)

    # ------------------------------------------------------------------
    # Vertical axis
    # ------------------------------------------------------------------

    def y_title(self, state: AxisState) -> str:
        cfg = self._config
        return cfg.y_title_log if state.y_log else cfg.y_title_linear

    def layout_vertical(self, state: AxisState, mode: VerticalMode) -> AxisState:
        """Apply a vertical mode, re-projecting the dwell overlay if present."""
        if mode is state.vertical_mode:
            return state

        overlay = state.dwell_overlay
        if overlay is not None:
            overlay = replace(
                overlay,
                display_y=to_logarithmic(mode is VerticalMode.LOGARITHMIC, overlay.threshold),
            )
        logger.debug("Vertical axis switched to %s", mode.value)
        return replace(state, vertical_mode=mode, dwell_overlay=overlay)

    def toggle_vertical(self, state: AxisState) -> AxisState:
        mode = VerticalMode.LINEAR if state.y_log else VerticalMode.LOGARITHMIC
        return self.layout_vertical(state, mode)

    # ------------------------------------------------------------------
    # Dwell time overlay
    # ------------------------------------------------------------------

    def apply_dwell_time(self, state: AxisState, max_dwell_time: Optional[float]) -> AxisState:
        """Create, update or remove the dwell time overlay.

        Args:
            state: Current axis state.
            max_dwell_time: Dwell time limit of the current region in ms, or
                None if the region declares none.
        """
        if not max_dwell_time:
            if state.dwell_overlay is None:
                return state
            logger.debug("Removing dwell time overlay")
            return replace(state, dwell_overlay=None)

        overlay = DwellOverlay(
            threshold=max_dwell_time,
            display_y=to_logarithmic(state.y_log, max_dwell_time),
            label=self._config.dwell_label,
        )
        if overlay == state.dwell_overlay:
            return state
        logger.debug("Dwell time overlay at %s ms", max_dwell_time)
        return replace(state, dwell_overlay=overlay)
