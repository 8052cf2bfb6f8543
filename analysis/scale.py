"""Value domain and pixel mapping for the deviation chart.

Notes:
    Horizontal spacing is ordinal: each selected record gets an evenly spaced
    column regardless of how much time passed between tests.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .dto import ChartLayout, DEFAULT_LAYOUT, ScoreRecord, ValueDomain
from .metrics import Metric, metric_value

DOMAIN_PADDING = 3


def collect_deviation_values(records: Sequence[ScoreRecord]) -> tuple[float, ...]:
    """Return every present deviation index across all metrics and records."""

    return tuple(
        value
        for metric in Metric
        for record in records
        if (value := metric_value(record, metric)) is not None
    )


def compute_value_domain(
    values: Sequence[float],
    *,
    padding: int = DOMAIN_PADDING,
) -> ValueDomain | None:
    """Compute the padded Y-axis domain for a set of values.

    Args:
        values: Deviation indices to cover.
        padding: Margin added below the minimum and above the maximum.

    Returns:
        ValueDomain with floored/ceiled bounds, or None when `values` is empty.
    """

    if not values:
        return None
    return ValueDomain(
        min=math.floor(min(values) - padding),
        max=math.ceil(max(values) + padding),
    )


@dataclass(frozen=True, slots=True)
class PixelMapping:
    """Affine mapping from chart space into canvas pixels.

    Args:
        domain: Value domain mapped onto the plot height.
        record_count: Number of evenly spaced columns.
        layout: Canvas geometry.
    """

    domain: ValueDomain
    record_count: int
    layout: ChartLayout = DEFAULT_LAYOUT

    @property
    def x_step(self) -> float:
        """Horizontal distance between consecutive records."""

        return self.layout.plot_width / max(self.record_count - 1, 1)

    def x(self, index: int) -> float:
        """Return the horizontal pixel for the record at `index`."""

        return self.layout.plot_left + index * self.x_step

    def y(self, value: float) -> float:
        """Return the vertical pixel for `value` (larger values sit higher)."""

        fraction = (value - self.domain.min) / self.domain.span
        return self.layout.plot_top + self.layout.plot_height - fraction * self.layout.plot_height


def build_pixel_mapping(
    domain: ValueDomain,
    record_count: int,
    layout: ChartLayout = DEFAULT_LAYOUT,
) -> PixelMapping:
    """Build the pixel mapping for a domain and a number of records."""

    return PixelMapping(domain=domain, record_count=record_count, layout=layout)
