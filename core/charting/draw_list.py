"""Draw-list types handed to the rendering surface.

Every leaf carries absolute pixel coordinates within the logical canvas, so a
surface only has to paint what it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from analysis.dto import ChartLayout, GridPlan, ValueDomain
from analysis.metrics import Metric

TextAnchor = Literal["start", "middle", "end"]


@dataclass(frozen=True, slots=True)
class TextLabel:
    """A positioned text label.

    Args:
        text: Label text.
        x: Anchor x coordinate.
        y: Baseline y coordinate.
        anchor: Horizontal alignment relative to `x`.
        color: Fill color.
        font_size: Font size in pixels.
        font_weight: CSS-style font weight.
        rotation: Rotation in degrees around (x, y).
    """

    text: str
    x: float
    y: float
    anchor: TextAnchor
    color: str
    font_size: int
    font_weight: str = "normal"
    rotation: float = 0.0


@dataclass(frozen=True, slots=True)
class GridLine:
    """A horizontal reference line and its value label."""

    value: int
    x1: float
    x2: float
    y: float
    color: str
    stroke_width: float
    dash: str | None
    is_threshold: bool
    label: TextLabel


@dataclass(frozen=True, slots=True)
class Polyline:
    """A sparse polyline joining the present points of a metric."""

    points: tuple[tuple[float, float], ...]
    color: str
    stroke_width: float
    opacity: float

    @property
    def segment_count(self) -> int:
        return max(len(self.points) - 1, 0)

    @property
    def path_data(self) -> str:
        """Return the SVG path `d` attribute for the polyline."""

        if len(self.points) < 2:
            return ""
        return " ".join(
            f"{'M' if i == 0 else 'L'} {_coord(x)} {_coord(y)}" for i, (x, y) in enumerate(self.points)
        )


@dataclass(frozen=True, slots=True)
class PointMarker:
    """A circular marker drawn at a series point."""

    x: float
    y: float
    radius: float
    fill: str
    stroke: str | None
    stroke_width: float
    opacity: float
    value: float
    record_index: int


@dataclass(frozen=True, slots=True)
class SeriesLayer:
    """Everything drawn for one visible metric."""

    metric: Metric
    line: Polyline
    markers: tuple[PointMarker, ...]
    value_labels: tuple[TextLabel, ...] = ()


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """A legend swatch for one visible metric."""

    metric: Metric
    label: str
    color: str
    opacity: float


@dataclass(frozen=True, slots=True)
class DrawList:
    """Declarative, coordinate-resolved chart description.

    Args:
        layout: Canvas geometry the coordinates refer to.
        domain: Value domain of the Y axis.
        grid_plan: Gridline plan the grid layer was built from.
        grid: Grid lines, ascending by value.
        threshold_label: Duplicate threshold label on the right edge, if shown.
        series: Series layers in draw order (subjects beneath aggregates).
        axis_labels: One date label per record.
        legend: Legend entries for visible metrics.
    """

    layout: ChartLayout
    domain: ValueDomain
    grid_plan: GridPlan
    grid: tuple[GridLine, ...]
    threshold_label: TextLabel | None
    series: tuple[SeriesLayer, ...]
    axis_labels: tuple[TextLabel, ...]
    legend: tuple[LegendEntry, ...]

    def series_for(self, metric: Metric) -> SeriesLayer | None:
        """Return the layer drawn for `metric`, if it is visible."""

        for layer in self.series:
            if layer.metric == metric:
                return layer
        return None


def _coord(value: float) -> str:
    """Format a pixel coordinate compactly for path data."""

    return f"{round(value, 2):g}"
