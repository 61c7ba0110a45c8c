"""Airtime plotting widget.

This module provides a PyQtGraph-based widget rendering the snapshots of a
GraphState: one line per data rate, the dwell time reference line, and two
buttons toggling the vertical scale and the horizontal mode.

Key features:
  - Re-renders only when the snapshot revision changes
  - Legend clicks hide/show a curve and are reported back to the state
  - Curves are only rebuilt when their data changed; visibility and axis
    changes are applied to the existing plot items
  - Viewport width forwarded to the state on show and resize
  - Hover readout of the sample nearest to the mouse
  - Linear vertical axis always starts at zero

Typical usage:

    state = GraphState(region=EU868, coding_rate=CodingRate.CR_4_5)
    graph = AirtimeGraphWidget(state)
    graph.show()

Google-style docstrings + PEP8.
"""

from __future__ import annotations

from functools import partial
from typing import Dict, Optional, Tuple

import numpy as np
import pyqtgraph as pg
from PySide6 import QtCore
from PySide6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from .models import AxisState, GraphSnapshot, Series, Visibility
from .state import GraphState
from .utils import to_logarithmic


class AirtimeGraphWidget(QWidget):
    """Renders GraphState snapshots with PyQtGraph.

    Attributes:
        plot_widget: The underlying ``pg.PlotWidget``.
        log_button: Toggles the vertical scale.
        range_button: Toggles the horizontal mode.
    """

    def __init__(self, state: Optional[GraphState] = None, parent: Optional[QWidget] = None) -> None:
        """Initialize the graph widget.

        Args:
            state: Graph state to render. A new, unconfigured one is created
                if omitted.
            parent: Parent widget.
        """
        super().__init__(parent)

        self._state = state if state is not None else GraphState(parent=self)
        self._config = self._state.config

        # Render bookkeeping
        self._rendered_revision: Optional[int] = None
        self._curves_key: Optional[Tuple] = None
        self._curve_items: Dict[str, pg.PlotDataItem] = {}
        self._dwell_line: Optional[pg.InfiniteLine] = None
        self._series: Tuple[Series, ...] = ()
        self._y_log = False
        self._rendering = False

        self._build_ui()

        self._state.snapshotChanged.connect(self.render_snapshot)
        self._state.idleChanged.connect(self._on_idle_changed)
        self._on_idle_changed(self._state.is_idle)
        self.render_snapshot(self._state.snapshot)

    @property
    def state(self) -> GraphState:
        return self._state

    @property
    def rendered_revision(self) -> Optional[int]:
        return self._rendered_revision

    def _build_ui(self) -> None:
        """Build the user interface."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground(self._config.background_color)
        self.plot_widget.setMinimumHeight(self._config.plot_height)
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        layout.addWidget(self.plot_widget)

        self.plot_item = self.plot_widget.getPlotItem()
        self.plot_item.addLegend(offset=(10, 10))
        self.plot_item.setLabel("bottom", self._config.x_title)
        self.plot_item.setLabel("left", self._config.y_title_linear)

        self.plot_item.vb.setMouseEnabled(x=False, y=False)
        self.plot_item.enableAutoRange(axis="y")

        self._hover_text = pg.TextItem(
            "",
            anchor=(0, 1),
            color="k",
            fill=pg.mkBrush(255, 255, 255, 220),
            border=pg.mkPen("k"),
        )
        self._hover_text.setZValue(1e6)
        self._hover_text.hide()
        self.plot_item.addItem(self._hover_text, ignoreBounds=True)
        self.plot_widget.scene().sigMouseMoved.connect(self._on_mouse_moved)

        button_row = QHBoxLayout()
        self.log_button = QPushButton("linear / logarithmic")
        self.log_button.setToolTip(
            "Switch between a linear or logarithmic scale for the vertical axis."
        )
        self.log_button.clicked.connect(self._state.toggle_vertical_scale)
        button_row.addWidget(self.log_button)

        self.range_button = QPushButton("fit all / scrollable")
        self.range_button.setToolTip(
            "Switch between a compressed horizontal range to fit all allowed payload "
            "sizes, or a scrollable range with a fixed-width scale per payload size."
        )
        self.range_button.clicked.connect(self._state.toggle_horizontal_mode)
        button_row.addWidget(self.range_button)
        button_row.addStretch()
        layout.addLayout(button_row)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._state.set_viewport_width(self.width())

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._state.set_viewport_width(event.size().width())

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_snapshot(self, snapshot: Optional[GraphSnapshot]) -> None:
        """Render a snapshot unless its revision is already displayed.

        Args:
            snapshot: Snapshot to render; None leaves the plot untouched.
        """
        if snapshot is None or snapshot.revision == self._rendered_revision:
            return

        self._rendering = True
        try:
            self._hover_text.hide()
            self._series = snapshot.series
            self._y_log = snapshot.axis_state.y_log
            self._render_axes(snapshot)
            self._render_series(snapshot.series)
            self._render_dwell_overlay(snapshot.axis_state)
        finally:
            self._rendering = False
        self._rendered_revision = snapshot.revision

    def _render_series(self, series: Tuple[Series, ...]) -> None:
        """Rebuild curves if their data changed, then sync visibility."""
        curves_key = tuple((s.name, s.points, s.color, s.stroke_width) for s in series)
        if curves_key != self._curves_key:
            for item in self._curve_items.values():
                self.plot_item.removeItem(item)
            self._curve_items = {}

            for s in series:
                item = pg.PlotDataItem(
                    x=list(s.x_data),
                    y=list(s.y_data),
                    pen=pg.mkPen(color=s.color, width=s.stroke_width),
                    name=s.name,
                    connect="all",
                )
                self.plot_item.addItem(item)
                item.visibleChanged.connect(partial(self._on_curve_visibility_changed, s.name))
                self._curve_items[s.name] = item
            self._curves_key = curves_key

        for s in series:
            self._curve_items[s.name].setVisible(s.visible)

    def _render_axes(self, snapshot: GraphSnapshot) -> None:
        axis_state = snapshot.axis_state
        self.plot_item.setLogMode(x=False, y=axis_state.y_log)
        self.plot_item.setLabel("left", self._state.axes.y_title(axis_state))

        if axis_state.fit_all:
            self.plot_item.vb.setMouseEnabled(x=False, y=False)
            if snapshot.data_domain is not None:
                x_min, x_max = snapshot.data_domain
                self.plot_item.setXRange(x_min, x_max, padding=0)
            else:
                self.plot_item.enableAutoRange(axis="x")
        else:
            self.plot_item.vb.setMouseEnabled(x=True, y=False)
            x_min, x_max = axis_state.horizontal_range
            self.plot_item.setXRange(x_min, x_max, padding=0)

        y_max = self._max_airtime(snapshot.series)
        if axis_state.y_log or y_max is None:
            self.plot_item.enableAutoRange(axis="y")
        else:
            self.plot_item.setYRange(0, y_max * (1 + self._config.y_headroom), padding=0)

    @staticmethod
    def _max_airtime(series: Tuple[Series, ...]) -> Optional[float]:
        """Highest airtime of the visible series, or of all if none is visible."""
        candidates = [s for s in series if s.visible and s.points]
        if not candidates:
            candidates = [s for s in series if s.points]
        if not candidates:
            return None
        return max(max(s.y_data) for s in candidates)

    def _render_dwell_overlay(self, axis_state: AxisState) -> None:
        if self._dwell_line is not None:
            self.plot_item.removeItem(self._dwell_line)
            self._dwell_line = None

        overlay = axis_state.dwell_overlay
        if overlay is None:
            return

        cfg = self._config
        line_color = pg.mkColor(cfg.dwell_color)
        line_color.setAlphaF(cfg.dwell_line_alpha)
        label_color = pg.mkColor(cfg.dwell_color)
        label_color.setAlphaF(cfg.dwell_label_alpha)

        line = pg.InfiniteLine(
            pos=overlay.display_y,
            angle=0,
            movable=False,
            pen=pg.mkPen(color=line_color, width=2, style=QtCore.Qt.DashDotLine),
            label=overlay.label,
            labelOpts={
                "position": 1.0,
                "anchors": [(1, 1), (1, 1)],
                "color": label_color,
            },
        )
        # Keep the reference line out of the auto-range computation
        self.plot_item.addItem(line, ignoreBounds=True)
        self._dwell_line = line

    @property
    def dwell_line(self) -> Optional[pg.InfiniteLine]:
        return self._dwell_line

    def curve_item(self, name: str) -> Optional[pg.PlotDataItem]:
        return self._curve_items.get(name)

    @property
    def hover_text(self) -> Optional[str]:
        """Text of the hover readout, or None while it is hidden."""
        if not self._hover_text.isVisible():
            return None
        return self._hover_text.toPlainText()

    # ------------------------------------------------------------------
    # Hover
    # ------------------------------------------------------------------

    def hover_at(self, x: float, y: float) -> Optional[str]:
        """Show the readout of the visible sample closest to a view position.

        The sample nearest to ``x`` is taken from each visible series, and
        the one whose displayed airtime is closest to ``y`` wins.

        Args:
            x: Payload size coordinate.
            y: Displayed airtime coordinate (log10 under a logarithmic scale).

        Returns:
            The readout text, or None if no visible series has samples.
        """
        best = None
        for s in self._series:
            if not s.visible or not s.points:
                continue
            xs = np.asarray(s.x_data, dtype=float)
            point = s.points[int(np.argmin(np.abs(xs - x)))]
            display_y = to_logarithmic(self._y_log, point.airtime)
            dist = abs(display_y - y)
            if best is None or dist < best[0]:
                best = (dist, point, display_y)

        if best is None:
            self._hover_text.hide()
            return None

        _, point, display_y = best
        text = self._config.hover_template.format(x=point.payload_size, y=point.airtime)
        self._hover_text.setText(text)
        self._hover_text.setPos(point.payload_size, display_y)
        self._hover_text.show()
        return text

    def _on_mouse_moved(self, pos) -> None:
        vb = self.plot_item.vb
        if not vb.sceneBoundingRect().contains(pos):
            self._hover_text.hide()
            return
        view_pos = vb.mapSceneToView(pos)
        self.hover_at(view_pos.x(), view_pos.y())

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_curve_visibility_changed(self, name: str) -> None:
        """Report a legend click back to the state."""
        if self._rendering:
            return
        item = self._curve_items.get(name)
        if item is None:
            return
        visibility = Visibility.VISIBLE if item.isVisible() else Visibility.LEGEND_ONLY
        self._state.set_series_visibility(name, visibility)

    def _on_idle_changed(self, idle: bool) -> None:
        self.plot_widget.setVisible(not idle)
        self.log_button.setVisible(not idle)
        self.range_button.setVisible(not idle)
        if not idle:
            self.render_snapshot(self._state.snapshot)
