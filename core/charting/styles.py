"""Static style configuration for the deviation chart.

Colors, opacities and stroke weights live here rather than in the assembler so
the rendering logic stays generic over the metric set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from analysis.metrics import Metric


@dataclass(frozen=True, slots=True)
class MetricStyle:
    """Presentation of one metric series.

    Args:
        label: Legend label.
        color: Stroke/fill color.
        opacity: Opacity applied to the line and its markers.
        stroke_width: Line width.
        point_radius: Marker radius.
        hollow_points: Draw markers as white discs outlined in `color`.
        show_values: Draw the numeric value above each marker.
        legend_opacity: Opacity of the legend swatch; defaults to `opacity`.
    """

    label: str
    color: str
    opacity: float = 1.0
    stroke_width: float = 2.5
    point_radius: float = 5.0
    hollow_points: bool = True
    show_values: bool = True
    legend_opacity: float | None = None


@dataclass(frozen=True, slots=True)
class LineStyle:
    """Stroke settings for a reference line."""

    color: str
    stroke_width: float
    dash: str | None = None


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font settings for a text label."""

    color: str
    font_size: int
    font_weight: str = "normal"


_SUBJECT_OPACITY = 0.4
_SUBJECT_STROKE = 1.5
_SUBJECT_RADIUS = 3.0
# Legend swatches for subjects are slightly stronger than their lines.
_SUBJECT_LEGEND_OPACITY = 0.5


METRIC_STYLES: Final[dict[Metric, MetricStyle]] = {
    Metric.four_subjects: MetricStyle(label="4科目", color="#3b82f6"),
    Metric.two_subjects: MetricStyle(label="2科目", color="#10b981"),
    Metric.kokugo: MetricStyle(
        label="国語",
        color="#10b981",
        opacity=_SUBJECT_OPACITY,
        stroke_width=_SUBJECT_STROKE,
        point_radius=_SUBJECT_RADIUS,
        hollow_points=False,
        show_values=False,
        legend_opacity=_SUBJECT_LEGEND_OPACITY,
    ),
    Metric.sansu: MetricStyle(
        label="算数",
        color="#ef4444",
        opacity=_SUBJECT_OPACITY,
        stroke_width=_SUBJECT_STROKE,
        point_radius=_SUBJECT_RADIUS,
        hollow_points=False,
        show_values=False,
        legend_opacity=_SUBJECT_LEGEND_OPACITY,
    ),
    Metric.rika: MetricStyle(
        label="理科",
        color="#3b82f6",
        opacity=_SUBJECT_OPACITY,
        stroke_width=_SUBJECT_STROKE,
        point_radius=_SUBJECT_RADIUS,
        hollow_points=False,
        show_values=False,
        legend_opacity=_SUBJECT_LEGEND_OPACITY,
    ),
    Metric.shakai: MetricStyle(
        label="社会",
        color="#f59e0b",
        opacity=_SUBJECT_OPACITY,
        stroke_width=_SUBJECT_STROKE,
        point_radius=_SUBJECT_RADIUS,
        hollow_points=False,
        show_values=False,
        legend_opacity=_SUBJECT_LEGEND_OPACITY,
    ),
}

GRID_STYLE: Final[LineStyle] = LineStyle(color="#e5e7eb", stroke_width=0.5)
THRESHOLD_STYLE: Final[LineStyle] = LineStyle(color="#007AFF", stroke_width=1.5, dash="6,3")

GRID_LABEL_STYLE: Final[TextStyle] = TextStyle(color="#86868b", font_size=11)
THRESHOLD_LABEL_STYLE: Final[TextStyle] = TextStyle(color="#007AFF", font_size=10, font_weight="600")
AXIS_LABEL_STYLE: Final[TextStyle] = TextStyle(color="#86868b", font_size=10)
VALUE_LABEL_FONT_SIZE: Final[int] = 10
VALUE_LABEL_FONT_WEIGHT: Final[str] = "600"

AXIS_LABEL_ROTATION: Final[float] = -30.0
AXIS_LABEL_OFFSET: Final[float] = 20.0
GRID_LABEL_OFFSET: Final[float] = 8.0
THRESHOLD_LABEL_OFFSET: Final[float] = 4.0
VALUE_LABEL_OFFSET: Final[float] = 10.0
LABEL_BASELINE_SHIFT: Final[float] = 4.0
