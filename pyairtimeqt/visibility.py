"""Series visibility tracking across recomputations.

Decides, per data rate, whether a freshly computed series is drawn or only
listed in the legend. User choices survive incremental recomputations and are
discarded when the region or coding rate changes.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Sequence, Tuple

from .models import DataRateDescriptor, Highlight, Series, Visibility


class VisibilityTracker:
    """Merges previous series visibility into newly computed series."""

    @staticmethod
    def default_visibility(descriptor: DataRateDescriptor) -> Visibility:
        """Configured visibility: legend only for low-highlight data rates."""
        if descriptor.highlight is Highlight.LOW:
            return Visibility.LEGEND_ONLY
        return Visibility.VISIBLE

    @staticmethod
    def reset_triggered(previous: Optional[Tuple[Any, Any]], current: Tuple[Any, Any]) -> bool:
        """Whether prior visibility choices are invalidated.

        Args:
            previous: ``(region, coding_rate)`` last applied, or None if nothing
                was applied yet.
            current: ``(region, coding_rate)`` being applied.
        """
        if previous is None:
            return True
        prev_region, prev_coding_rate = previous
        region, coding_rate = current
        return region != prev_region or coding_rate != prev_coding_rate

    def resolve(
        self,
        descriptor: DataRateDescriptor,
        previous_series: Optional[Series],
        reset_triggered: bool,
    ) -> Visibility:
        """Resolve the visibility of one series.

        Args:
            descriptor: Catalog entry the series belongs to.
            previous_series: Series at the same catalog index in the previous
                snapshot, if any.
            reset_triggered: Discard prior user choices.
        """
        configured = self.default_visibility(descriptor)
        if reset_triggered:
            return configured
        if previous_series is None or previous_series.visibility is None:
            return configured
        return previous_series.visibility

    def merge(
        self,
        descriptors: Sequence[DataRateDescriptor],
        series: Sequence[Series],
        previous_series: Sequence[Series],
        reset_triggered: bool,
    ) -> Tuple[Series, ...]:
        """Return ``series`` with visibility resolved index by index."""
        merged = []
        for idx, (descriptor, s) in enumerate(zip(descriptors, series)):
            previous = previous_series[idx] if idx < len(previous_series) else None
            merged.append(
                replace(s, visibility=self.resolve(descriptor, previous, reset_triggered))
            )
        return tuple(merged)
