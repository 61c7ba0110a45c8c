"""Reactive graph state combining curves, visibility and axis layout.

GraphState owns the inputs of the graph (region, coding rate, packet size,
viewport width and the two axis toggles) and turns every change into a new
immutable GraphSnapshot with an incremented revision.

Work is organized as reaction rules. Each rule declares the inputs it depends
on and re-runs only when their value changed since its last run:

  - configuration (region, coding rate, packet size): recompute the curves,
    merge visibility and apply the dwell time overlay, published as a single
    snapshot
  - vertical axis (logarithmic flag)
  - horizontal axis (fit-all flag, viewport width)

Example usage:

    state = GraphState(region=EU868, coding_rate=CodingRate.CR_4_5)
    state.snapshotChanged.connect(widget.render_snapshot)
    state.set_viewport_width(970)
    state.toggle_vertical_scale()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Tuple

from PySide6 import QtCore

from .axes import AxisLayoutManager
from .config import GraphConfig
from .curves import CurveComputer
from .models import (
    AxisState,
    CodingRate,
    GraphSnapshot,
    HorizontalMode,
    RegionConfig,
    VerticalMode,
    Visibility,
)
from .visibility import VisibilityTracker

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class ReactionRule:
    """A unit of work re-run whenever its input key changes by value."""

    name: str
    key_fn: Callable[[], Tuple[Any, ...]]
    apply_fn: Callable[[], None]
    last_key: Any = field(default=_UNSET)

    def run_if_changed(self) -> bool:
        key = self.key_fn()
        if self.last_key is not _UNSET and key == self.last_key:
            return False
        self.last_key = key
        self.apply_fn()
        return True


class GraphState(QtCore.QObject):
    """Aggregate state of the airtime graph.

    Signals:
        snapshotChanged: Emitted with the new GraphSnapshot after every
            published change.
        idleChanged: Emitted with True when the graph has nothing to show
            (no region or coding rate), False when it becomes configured.
    """

    snapshotChanged = QtCore.Signal(object)
    idleChanged = QtCore.Signal(bool)

    def __init__(
        self,
        region: Optional[RegionConfig] = None,
        coding_rate: Optional[CodingRate] = None,
        packet_size: Optional[int] = None,
        config: Optional[GraphConfig] = None,
        curve_computer: Optional[CurveComputer] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)

        self._config = config or GraphConfig()
        self._curves = curve_computer or CurveComputer(self._config)
        self._visibility = VisibilityTracker()
        self._axes = AxisLayoutManager(self._config)

        # Inputs
        self._region = region
        self._coding_rate = coding_rate
        self._packet_size = packet_size
        self._viewport_width: Optional[float] = None
        self._y_logarithmic = False
        self._x_fit_all = True

        # (region, coding_rate) of the last applied configuration
        self._applied_config: Optional[Tuple[RegionConfig, CodingRate]] = None

        self._snapshot = GraphSnapshot(axis_state=self._axes.initial_state())
        # Axis changes made while idle, published with the next configuration
        self._pending_axis_state: Optional[AxisState] = None

        # Prevent re-entrant rule evaluation
        self._updating = False
        self._dirty = False

        self._rules: List[ReactionRule] = [
            ReactionRule(
                "configuration",
                lambda: (self._region, self._coding_rate, self._packet_size),
                self._apply_configuration,
            ),
            ReactionRule("vertical", lambda: (self._y_logarithmic,), self._apply_vertical),
            ReactionRule(
                "horizontal",
                lambda: (self._x_fit_all, self._viewport_width),
                self._apply_horizontal,
            ),
        ]

        self._evaluate()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def config(self) -> GraphConfig:
        return self._config

    @property
    def axes(self) -> AxisLayoutManager:
        return self._axes

    @property
    def region(self) -> Optional[RegionConfig]:
        return self._region

    @property
    def coding_rate(self) -> Optional[CodingRate]:
        return self._coding_rate

    @property
    def packet_size(self) -> Optional[int]:
        return self._packet_size

    @property
    def viewport_width(self) -> Optional[float]:
        return self._viewport_width

    @property
    def is_idle(self) -> bool:
        return self._region is None or self._coding_rate is None

    @property
    def snapshot(self) -> Optional[GraphSnapshot]:
        """Current snapshot, or None while the graph is idle."""
        if self.is_idle:
            return None
        return self._snapshot

    @property
    def revision(self) -> int:
        return self._snapshot.revision

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def set_region(self, region: Optional[RegionConfig]) -> None:
        self.configure(region=region)

    def set_coding_rate(self, coding_rate: Optional[CodingRate]) -> None:
        self.configure(coding_rate=coding_rate)

    def set_packet_size(self, packet_size: Optional[int]) -> None:
        self.configure(packet_size=packet_size)

    def configure(self, **changes: Any) -> None:
        """Change several configuration inputs in a single evaluation pass.

        Args:
            **changes: Any of ``region``, ``coding_rate`` and ``packet_size``.

        Raises:
            TypeError: If an unknown input name is given.
        """
        unknown = set(changes) - {"region", "coding_rate", "packet_size"}
        if unknown:
            raise TypeError(f"Unknown graph inputs: {', '.join(sorted(unknown))}")

        was_idle = self.is_idle
        if "region" in changes:
            self._region = changes["region"]
        if "coding_rate" in changes:
            self._coding_rate = changes["coding_rate"]
        if "packet_size" in changes:
            self._packet_size = changes["packet_size"]

        self._evaluate()

        if self.is_idle != was_idle:
            self.idleChanged.emit(self.is_idle)

    def set_viewport_width(self, width: float) -> None:
        self._viewport_width = float(width)
        self._evaluate()

    def toggle_vertical_scale(self) -> None:
        self._y_logarithmic = not self._y_logarithmic
        self._evaluate()

    def toggle_horizontal_mode(self) -> None:
        self._x_fit_all = not self._x_fit_all
        self._evaluate()

    def set_series_visibility(self, name: str, visibility: Visibility) -> None:
        """Record a user visibility choice for one series, e.g. a legend click.

        Raises:
            KeyError: If no series with that name is plotted.
        """
        series = list(self._snapshot.series)
        for idx, s in enumerate(series):
            if s.name == name:
                break
        else:
            raise KeyError(name)

        if self.is_idle:
            logger.debug("Ignoring visibility of %s while idle", name)
            return
        if series[idx].visibility is visibility:
            return
        series[idx] = replace(series[idx], visibility=visibility)
        self._publish(series=tuple(series))

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _evaluate(self) -> None:
        """Run every rule whose inputs changed, until no input changes."""
        if self._updating:
            self._dirty = True
            return

        self._updating = True
        try:
            while True:
                self._dirty = False
                for rule in self._rules:
                    if rule.run_if_changed():
                        logger.debug("Rule '%s' ran", rule.name)
                if not self._dirty:
                    break
        finally:
            self._updating = False

    def _apply_configuration(self) -> None:
        region = self._region
        coding_rate = self._coding_rate
        if region is None or coding_rate is None:
            logger.debug("Graph idle: region or coding rate not configured")
            return

        reset = VisibilityTracker.reset_triggered(self._applied_config, (region, coding_rate))
        previous = self._snapshot
        changes = {}

        computed = self._curves.compute_for_region(region, coding_rate)
        if computed:
            changes["series"] = self._visibility.merge(
                self._curves.data_rates(region),
                computed,
                previous.series,
                reset,
            )
            changes["data_domain"] = (computed[0].x_data[0], computed[0].x_data[-1])
            self._applied_config = (region, coding_rate)

        axis_state = self._axes.apply_dwell_time(self._axis_state(), region.max_dwell_time)
        if axis_state is not previous.axis_state:
            changes["axis_state"] = axis_state

        if changes:
            self._publish(**changes)

    def _apply_vertical(self) -> None:
        mode = VerticalMode.LOGARITHMIC if self._y_logarithmic else VerticalMode.LINEAR
        self._publish_axis_state(self._axes.layout_vertical(self._axis_state(), mode))

    def _apply_horizontal(self) -> None:
        if self._viewport_width is None:
            return
        mode = HorizontalMode.FIT_ALL if self._x_fit_all else HorizontalMode.FIXED_SCALE
        self._publish_axis_state(
            self._axes.layout_horizontal(self._axis_state(), mode, self._viewport_width)
        )

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    def _axis_state(self) -> AxisState:
        if self._pending_axis_state is not None:
            return self._pending_axis_state
        return self._snapshot.axis_state

    def _publish_axis_state(self, axis_state: AxisState) -> None:
        if axis_state is self._axis_state():
            return
        if self.is_idle:
            self._pending_axis_state = axis_state
            return
        self._publish(axis_state=axis_state)

    def _publish(self, **changes: Any) -> None:
        """Replace the current snapshot, incrementing the revision once."""
        snapshot = replace(self._snapshot, revision=self._snapshot.revision + 1, **changes)
        self._snapshot = snapshot
        self._pending_axis_state = None
        logger.debug("Published revision %d (%s)", snapshot.revision, ", ".join(changes))
        self.snapshotChanged.emit(snapshot)
