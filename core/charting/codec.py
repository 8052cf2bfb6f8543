"""JSON encoding/decoding for the deviation chart endpoint.

Incoming records use the persistence layer's document shape (camelCase keys,
numbers that may arrive as strings, empty strings for blank form fields).
Outgoing draw lists are plain dictionaries safe for `JsonResponse`.
"""

from __future__ import annotations

import math
from datetime import date, datetime, tzinfo
from typing import Any, cast

from analysis.dto import AggregateScore, ScoreRecord, Subject, SubjectValues

from .draw_list import DrawList, GridLine, LegendEntry, PointMarker, SeriesLayer, TextLabel


class ScoreRecordPayloadError(ValueError):
    """Raised when a score record payload cannot be decoded."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the problem.
            index: Position of the offending record in the payload, if known.
        """

        if index is not None:
            message = f"records[{index}]: {message}"
        super().__init__(message)
        self.index = index


def decode_score_records(payload: object, *, tz: tzinfo | None = None) -> tuple[ScoreRecord, ...]:
    """Decode a list of score record documents.

    Args:
        payload: Decoded JSON list of record objects.
        tz: Timezone used to date timezone-aware `testDate` timestamps.

    Returns:
        ScoreRecord tuple in payload order.

    Raises:
        ScoreRecordPayloadError: When the payload is not a list of objects, a
            record lacks a parseable `testDate`, or a numeric field is not a
            finite number.
    """

    if not isinstance(payload, list):
        raise ScoreRecordPayloadError("Expected a list of score records.")
    records: list[ScoreRecord] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise ScoreRecordPayloadError("Expected an object.", index=index)
        try:
            records.append(decode_score_record(cast(dict[str, Any], raw), fallback_id=str(index), tz=tz))
        except ScoreRecordPayloadError as exc:
            raise ScoreRecordPayloadError(str(exc), index=index) from exc
    return tuple(records)


def decode_score_record(
    raw: dict[str, Any],
    *,
    fallback_id: str = "",
    tz: tzinfo | None = None,
) -> ScoreRecord:
    """Decode a single score record document.

    Args:
        raw: Record object as stored by the persistence layer.
        fallback_id: Identifier used when the document carries none.
        tz: Timezone used to date timezone-aware `testDate` timestamps.

    Returns:
        ScoreRecord instance.

    Raises:
        ScoreRecordPayloadError: When `testDate` or a numeric field is invalid.
    """

    record_id = raw.get("id") or raw.get("firestoreId") or fallback_id
    return ScoreRecord(
        id=str(record_id),
        test_date=_parse_test_date(raw.get("testDate"), tz=tz),
        grade=_parse_text(raw.get("grade")),
        test_name=_parse_text(raw.get("testName")),
        scores=_parse_subject_values(raw.get("scores"), field="scores"),
        max_scores=_parse_subject_values(raw.get("maxScores"), field="maxScores"),
        deviations=_parse_subject_values(raw.get("deviations"), field="deviations"),
        two_subjects=_parse_aggregate(raw.get("twoSubjects"), field="twoSubjects"),
        four_subjects=_parse_aggregate(raw.get("fourSubjects"), field="fourSubjects"),
        course=_parse_text(raw.get("course")),
        class_name=_parse_text(raw.get("className")),
        notes=_parse_text(raw.get("notes")),
    )


def encode_draw_list(draw_list: DrawList) -> dict[str, Any]:
    """Encode a DrawList into a JSON-serializable dictionary.

    Args:
        draw_list: DrawList produced by the chart renderer.

    Returns:
        Dict payload for the rendering surface.
    """

    layout = draw_list.layout
    return {
        "canvas": {
            "width": layout.width,
            "height": layout.height,
            "margin": {
                "top": layout.margin_top,
                "right": layout.margin_right,
                "bottom": layout.margin_bottom,
                "left": layout.margin_left,
            },
        },
        "domain": {"min": draw_list.domain.min, "max": draw_list.domain.max},
        "grid": {
            "step": draw_list.grid_plan.step,
            "showThreshold": draw_list.grid_plan.show_threshold,
            "threshold": draw_list.grid_plan.threshold,
            "lines": [_encode_grid_line(line) for line in draw_list.grid],
            "thresholdLabel": _encode_label(draw_list.threshold_label)
            if draw_list.threshold_label is not None
            else None,
        },
        "series": [_encode_series(layer) for layer in draw_list.series],
        "axisLabels": [_encode_label(label) for label in draw_list.axis_labels],
        "legend": [_encode_legend(entry) for entry in draw_list.legend],
    }


def _encode_grid_line(line: GridLine) -> dict[str, Any]:
    return {
        "value": line.value,
        "x1": line.x1,
        "x2": line.x2,
        "y": line.y,
        "color": line.color,
        "strokeWidth": line.stroke_width,
        "dash": line.dash,
        "isThreshold": line.is_threshold,
        "label": _encode_label(line.label),
    }


def _encode_series(layer: SeriesLayer) -> dict[str, Any]:
    return {
        "metric": layer.metric.value,
        "path": layer.line.path_data,
        "color": layer.line.color,
        "strokeWidth": layer.line.stroke_width,
        "opacity": layer.line.opacity,
        "points": [_encode_marker(marker) for marker in layer.markers],
        "valueLabels": [_encode_label(label) for label in layer.value_labels],
    }


def _encode_marker(marker: PointMarker) -> dict[str, Any]:
    return {
        "x": marker.x,
        "y": marker.y,
        "r": marker.radius,
        "fill": marker.fill,
        "stroke": marker.stroke,
        "strokeWidth": marker.stroke_width,
        "opacity": marker.opacity,
        "value": marker.value,
        "recordIndex": marker.record_index,
    }


def _encode_label(label: TextLabel) -> dict[str, Any]:
    return {
        "text": label.text,
        "x": label.x,
        "y": label.y,
        "anchor": label.anchor,
        "color": label.color,
        "fontSize": label.font_size,
        "fontWeight": label.font_weight,
        "rotation": label.rotation,
    }


def _encode_legend(entry: LegendEntry) -> dict[str, Any]:
    return {
        "metric": entry.metric.value,
        "label": entry.label,
        "color": entry.color,
        "opacity": entry.opacity,
    }


def _parse_test_date(value: object, *, tz: tzinfo | None = None) -> date:
    """Parse an ISO date or timestamp into a calendar date.

    Timezone-aware timestamps are converted to `tz` before taking the date;
    naive timestamps keep their own date.
    """

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    elif not isinstance(value, str) or not value.strip():
        raise ScoreRecordPayloadError("testDate is required.")
    else:
        text = value.strip()
        try:
            if len(text) <= 10:
                return date.fromisoformat(text)
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ScoreRecordPayloadError(f"testDate {value!r} is not an ISO date.") from exc
    if moment.tzinfo is not None and tz is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def _parse_number(value: object, *, field: str) -> float | None:
    """Parse an optional finite number; blank values mean absent."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if not isinstance(value, int | float | str):
        raise ScoreRecordPayloadError(f"{field} must be a number.")
    try:
        number = float(value)
    except ValueError as exc:
        raise ScoreRecordPayloadError(f"{field} {value!r} is not a number.") from exc
    except OverflowError as exc:
        raise ScoreRecordPayloadError(f"{field} must be a finite number.") from exc
    if not math.isfinite(number):
        raise ScoreRecordPayloadError(f"{field} must be a finite number.")
    return number


def _parse_count(value: object, *, field: str) -> int | None:
    number = _parse_number(value, field=field)
    if number is None:
        return None
    return int(number)


def _parse_subject_values(value: object, *, field: str) -> SubjectValues:
    if not isinstance(value, dict):
        return SubjectValues()
    return SubjectValues(
        **{subject.value: _parse_number(value.get(subject.value), field=f"{field}.{subject.value}") for subject in Subject}
    )


def _parse_aggregate(value: object, *, field: str) -> AggregateScore | None:
    if not isinstance(value, dict):
        return None
    return AggregateScore(
        score=_parse_number(value.get("score"), field=f"{field}.score"),
        max_score=_parse_number(value.get("maxScore"), field=f"{field}.maxScore"),
        deviation=_parse_number(value.get("deviation"), field=f"{field}.deviation"),
        rank=_parse_count(value.get("rank"), field=f"{field}.rank"),
        cohort_size=_parse_count(value.get("totalStudents"), field=f"{field}.totalStudents"),
    )


def _parse_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)
