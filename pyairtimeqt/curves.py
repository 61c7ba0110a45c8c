"""Airtime curve computation.

Builds one airtime-versus-payload-size series per data rate of a region.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

from .airtime import calculate_airtime
from .config import GraphConfig
from .datarates import get_data_rates
from .models import (
    CodingRate,
    DataRateDescriptor,
    Highlight,
    RadioMode,
    RegionConfig,
    Series,
    SeriesPoint,
)
from .utils import sample_range

logger = logging.getLogger(__name__)

AirtimeFn = Callable[..., float]
CatalogFn = Callable[[RegionConfig], Sequence[DataRateDescriptor]]
SequenceFn = Callable[[int, int, int], Sequence[int]]


class CurveComputer:
    """Computes airtime curves for every data rate of a region.

    The airtime formula, the data rate catalog and the sequence generator are
    injectable; they default to the package implementations.
    """

    def __init__(
        self,
        config: Optional[GraphConfig] = None,
        airtime_fn: AirtimeFn = calculate_airtime,
        catalog_fn: CatalogFn = get_data_rates,
        sequence_fn: SequenceFn = sample_range,
    ) -> None:
        self._config = config or GraphConfig()
        self._airtime_fn = airtime_fn
        self._catalog_fn = catalog_fn
        self._sequence_fn = sequence_fn

    def data_rates(self, region: RegionConfig) -> Tuple[DataRateDescriptor, ...]:
        return tuple(self._catalog_fn(region))

    def compute(
        self,
        region: RegionConfig,
        coding_rate: CodingRate,
        spreading_factor: int,
        bandwidth: float,
        radio_mode: RadioMode,
        overhead_bytes: int,
        max_payload_size: int,
    ) -> Tuple[Series, ...]:
        """Compute one series per data rate, visibility left unset.

        Every series is evaluated with the given spreading factor and
        bandwidth.

        Args:
            region: Region whose data rates are plotted.
            coding_rate: Coding rate passed to the airtime formula.
            spreading_factor: Spreading factor passed to the airtime formula.
            bandwidth: Bandwidth in kHz passed to the airtime formula.
            radio_mode: Modulation family passed to the airtime formula.
            overhead_bytes: Bytes added to every sampled payload size.
            max_payload_size: Last sampled payload size, inclusive.

        Returns:
            Series in catalog order, or an empty tuple if ``max_payload_size``
            is not positive.
        """
        xs = self._samples(region, max_payload_size)
        if not xs:
            return ()

        series = tuple(
            self._build_series(
                dr, xs, coding_rate, spreading_factor, bandwidth, radio_mode, overhead_bytes
            )
            for dr in self._catalog_fn(region)
        )
        logger.debug(
            "Computed %d curves for %s (SF%d, %s kHz, %s), %d samples each",
            len(series),
            region.id,
            spreading_factor,
            bandwidth,
            coding_rate.value,
            len(xs),
        )
        return series

    def compute_for_region(
        self, region: RegionConfig, coding_rate: CodingRate
    ) -> Tuple[Series, ...]:
        """Compute the curves over the region's full payload range.

        The domain is the region's maximum MACPayload size shifted by the
        configured overhead, and the same overhead is added to every sample.
        Each data rate is evaluated with its own spreading factor and
        bandwidth; data rates without them use the region's first ones.
        """
        overhead = self._config.overhead_bytes
        xs = self._samples(region, region.max_mac_payload_size + overhead)
        if not xs:
            return ()

        series = []
        for dr in self._catalog_fn(region):
            sf = dr.spreading_factor
            if sf is None:
                sf = region.spreading_factors[0]
            bw = dr.bandwidth
            if bw is None:
                bw = region.bandwidths[0]
            series.append(
                self._build_series(
                    dr, xs, coding_rate, sf, bw, region.radio_mode, overhead
                )
            )

        logger.debug(
            "Computed %d curves for %s (%s), %d samples each",
            len(series),
            region.id,
            coding_rate.value,
            len(xs),
        )
        return tuple(series)

    def _samples(self, region: RegionConfig, max_payload_size: int) -> Tuple[int, ...]:
        if max_payload_size <= 0:
            logger.debug(
                "Skipping curve computation for %s: max payload size %d",
                region.id,
                max_payload_size,
            )
            return ()
        return tuple(self._sequence_fn(0, max_payload_size, self._config.sample_step))

    def _build_series(
        self,
        descriptor: DataRateDescriptor,
        xs: Tuple[int, ...],
        coding_rate: CodingRate,
        spreading_factor: int,
        bandwidth: float,
        radio_mode: RadioMode,
        overhead_bytes: int,
    ) -> Series:
        cfg = self._config
        points = tuple(
            SeriesPoint(
                payload_size=x,
                airtime=self._airtime_fn(
                    x + overhead_bytes,
                    spreading_factor,
                    bandwidth,
                    coding_rate,
                    radio_mode,
                    cfg.preamble_length,
                    cfg.explicit_header,
                    cfg.low_data_rate_optimize,
                    cfg.crc,
                ),
            )
            for x in xs
        )
        return Series(
            name=descriptor.name,
            points=points,
            color=descriptor.color,
            stroke_width=3.0 if descriptor.highlight is Highlight.HIGH else 1.0,
        )
