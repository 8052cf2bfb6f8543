"""Per-metric series extraction for the deviation chart."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .dto import ScoreRecord, SeriesPoint
from .metrics import DRAW_ORDER, Metric, metric_value
from .scale import PixelMapping

MIN_SERIES_POINTS = 2


@dataclass(frozen=True, slots=True)
class EligibleSeries:
    """The plotted points of one metric.

    Attributes:
        metric: Metric the points belong to.
        points: Points for records carrying the metric, in record order.
    """

    metric: Metric
    points: tuple[SeriesPoint, ...] = ()

    @property
    def is_visible(self) -> bool:
        """A series needs at least two points to draw a line."""

        return len(self.points) >= MIN_SERIES_POINTS

    @property
    def segment_count(self) -> int:
        if not self.is_visible:
            return 0
        return len(self.points) - 1


def build_series(
    records: Sequence[ScoreRecord],
    mapping: PixelMapping,
    metric: Metric,
) -> EligibleSeries:
    """Build the series for a single metric.

    Records missing the metric are skipped; the remaining points are joined in
    record order without interpolating the gaps.
    """

    points = tuple(
        SeriesPoint(x=mapping.x(index), y=mapping.y(value), value=value, record_index=index)
        for index, record in enumerate(records)
        if (value := metric_value(record, metric)) is not None
    )
    return EligibleSeries(metric=metric, points=points)


def build_all_series(
    records: Sequence[ScoreRecord],
    mapping: PixelMapping,
) -> tuple[EligibleSeries, ...]:
    """Build every metric series in draw order (subjects first)."""

    return tuple(build_series(records, mapping, metric) for metric in DRAW_ORDER)
