"""Assemble the deviation trend chart into a declarative draw list.

The pipeline is a pure function of its input: records are selected and
ordered, a value domain and pixel mapping are derived, per-metric series and
gridlines are computed, and everything is composed into a `DrawList`. Any
"not enough data" condition yields None instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from analysis.dto import ChartLayout, DEFAULT_LAYOUT, GridPlan, ScoreRecord
from analysis.grid import plan_grid
from analysis.metrics import LEGEND_ORDER, Metric
from analysis.scale import PixelMapping, build_pixel_mapping, collect_deviation_values, compute_value_domain
from analysis.selection import is_renderable, select_chart_records
from analysis.series import EligibleSeries, build_all_series

from .draw_list import DrawList, GridLine, LegendEntry, PointMarker, Polyline, SeriesLayer, TextLabel
from .styles import (
    AXIS_LABEL_OFFSET,
    AXIS_LABEL_ROTATION,
    AXIS_LABEL_STYLE,
    GRID_LABEL_OFFSET,
    GRID_LABEL_STYLE,
    GRID_STYLE,
    LABEL_BASELINE_SHIFT,
    METRIC_STYLES,
    THRESHOLD_LABEL_OFFSET,
    THRESHOLD_LABEL_STYLE,
    THRESHOLD_STYLE,
    VALUE_LABEL_FONT_SIZE,
    VALUE_LABEL_FONT_WEIGHT,
    VALUE_LABEL_OFFSET,
    MetricStyle,
)

logger = logging.getLogger(__name__)

DEFAULT_DATE_LABEL_FORMAT = "{month}月{day}日"


def render_deviation_chart(
    records: Iterable[ScoreRecord],
    *,
    grade: str | None = None,
    layout: ChartLayout = DEFAULT_LAYOUT,
    styles: Mapping[Metric, MetricStyle] = METRIC_STYLES,
    date_label_format: str = DEFAULT_DATE_LABEL_FORMAT,
) -> DrawList | None:
    """Render the deviation trend chart for a set of score records.

    Args:
        records: Score records in any order; the sequence is not modified.
        grade: Optional enrollment-year label to scope the chart to.
        layout: Canvas geometry.
        styles: Style per metric.
        date_label_format: `str.format` template for X-axis labels; receives
            `year`, `month` and `day`.

    Returns:
        DrawList, or None when fewer than two eligible records exist.
    """

    selected = select_chart_records(records, grade=grade)
    if not is_renderable(selected):
        logger.debug("Deviation chart suppressed: %d eligible record(s).", len(selected))
        return None
    return assemble_draw_list(
        selected,
        layout=layout,
        styles=styles,
        date_label_format=date_label_format,
    )


def assemble_draw_list(
    records: Sequence[ScoreRecord],
    *,
    layout: ChartLayout = DEFAULT_LAYOUT,
    styles: Mapping[Metric, MetricStyle] = METRIC_STYLES,
    date_label_format: str = DEFAULT_DATE_LABEL_FORMAT,
) -> DrawList | None:
    """Compose a draw list from already-selected, date-ordered records.

    Args:
        records: Records in display order.
        layout: Canvas geometry.
        styles: Style per metric.
        date_label_format: Template for X-axis date labels.

    Returns:
        DrawList, or None when no record carries any deviation index.
    """

    domain = compute_value_domain(collect_deviation_values(records))
    if domain is None:
        logger.debug("Deviation chart suppressed: no deviation values present.")
        return None

    mapping = build_pixel_mapping(domain, len(records), layout)
    series = build_all_series(records, mapping)
    grid_plan = plan_grid(domain)
    visible = [s for s in series if s.is_visible]
    by_metric = {s.metric: s for s in visible}

    return DrawList(
        layout=layout,
        domain=domain,
        grid_plan=grid_plan,
        grid=_grid_lines(grid_plan, mapping),
        threshold_label=_threshold_label(grid_plan, mapping),
        series=tuple(_series_layer(s, styles[s.metric]) for s in visible),
        axis_labels=_axis_labels(records, mapping, date_label_format),
        legend=tuple(
            _legend_entry(metric, styles[metric]) for metric in LEGEND_ORDER if metric in by_metric
        ),
    )


def format_date_label(value: date, date_label_format: str = DEFAULT_DATE_LABEL_FORMAT) -> str:
    """Format a test date as a short month/day label."""

    return date_label_format.format(year=value.year, month=value.month, day=value.day)


def format_value(value: float) -> str:
    """Format a deviation index without a trailing `.0`."""

    return f"{value:g}"


def _grid_lines(plan: GridPlan, mapping: PixelMapping) -> tuple[GridLine, ...]:
    layout = mapping.layout
    lines: list[GridLine] = []
    for level in plan.levels:
        y = mapping.y(level)
        is_threshold = level == plan.threshold
        line_style = THRESHOLD_STYLE if is_threshold else GRID_STYLE
        lines.append(
            GridLine(
                value=level,
                x1=layout.plot_left,
                x2=layout.plot_right,
                y=y,
                color=line_style.color,
                stroke_width=line_style.stroke_width,
                dash=line_style.dash,
                is_threshold=is_threshold,
                label=TextLabel(
                    text=str(level),
                    x=layout.plot_left - GRID_LABEL_OFFSET,
                    y=y + LABEL_BASELINE_SHIFT,
                    anchor="end",
                    color=GRID_LABEL_STYLE.color,
                    font_size=GRID_LABEL_STYLE.font_size,
                ),
            )
        )
    return tuple(lines)


def _threshold_label(plan: GridPlan, mapping: PixelMapping) -> TextLabel | None:
    if not plan.show_threshold:
        return None
    return TextLabel(
        text=str(plan.threshold),
        x=mapping.layout.plot_right + THRESHOLD_LABEL_OFFSET,
        y=mapping.y(plan.threshold) + LABEL_BASELINE_SHIFT,
        anchor="start",
        color=THRESHOLD_LABEL_STYLE.color,
        font_size=THRESHOLD_LABEL_STYLE.font_size,
        font_weight=THRESHOLD_LABEL_STYLE.font_weight,
    )


def _series_layer(series: EligibleSeries, style: MetricStyle) -> SeriesLayer:
    line = Polyline(
        points=tuple((p.x, p.y) for p in series.points),
        color=style.color,
        stroke_width=style.stroke_width,
        opacity=style.opacity,
    )
    markers = tuple(
        PointMarker(
            x=p.x,
            y=p.y,
            radius=style.point_radius,
            fill="white" if style.hollow_points else style.color,
            stroke=style.color if style.hollow_points else None,
            stroke_width=2.0 if style.hollow_points else 0.0,
            opacity=style.opacity,
            value=p.value,
            record_index=p.record_index,
        )
        for p in series.points
    )
    value_labels: tuple[TextLabel, ...] = ()
    if style.show_values:
        value_labels = tuple(
            TextLabel(
                text=format_value(p.value),
                x=p.x,
                y=p.y - VALUE_LABEL_OFFSET,
                anchor="middle",
                color=style.color,
                font_size=VALUE_LABEL_FONT_SIZE,
                font_weight=VALUE_LABEL_FONT_WEIGHT,
            )
            for p in series.points
        )
    return SeriesLayer(metric=series.metric, line=line, markers=markers, value_labels=value_labels)


def _axis_labels(
    records: Sequence[ScoreRecord],
    mapping: PixelMapping,
    date_label_format: str,
) -> tuple[TextLabel, ...]:
    y = mapping.layout.plot_bottom + AXIS_LABEL_OFFSET
    return tuple(
        TextLabel(
            text=format_date_label(record.test_date, date_label_format),
            x=mapping.x(index),
            y=y,
            anchor="middle",
            color=AXIS_LABEL_STYLE.color,
            font_size=AXIS_LABEL_STYLE.font_size,
            rotation=AXIS_LABEL_ROTATION,
        )
        for index, record in enumerate(records)
    )


def _legend_entry(metric: Metric, style: MetricStyle) -> LegendEntry:
    opacity = style.opacity if style.legend_opacity is None else style.legend_opacity
    return LegendEntry(metric=metric, label=style.label, color=style.color, opacity=opacity)
