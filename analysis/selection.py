"""Record selection for the deviation chart.

Only records reporting an aggregate deviation index are charted. Selection
returns a new, date-ordered tuple and never mutates the caller's sequence.
"""

from __future__ import annotations

from collections.abc import Iterable

from .dto import ScoreRecord
from .metrics import AGGREGATE_METRICS, metric_value

MIN_CHART_RECORDS = 2


def is_chart_eligible(record: ScoreRecord) -> bool:
    """Return True when a record carries a four- or two-subject deviation."""

    return any(metric_value(record, metric) is not None for metric in AGGREGATE_METRICS)


def select_chart_records(
    records: Iterable[ScoreRecord],
    *,
    grade: str | None = None,
) -> tuple[ScoreRecord, ...]:
    """Select and order the records that feed the chart.

    Args:
        records: Score records in any order.
        grade: Optional enrollment-year label; when given, other grades are
            dropped before eligibility is checked.

    Returns:
        Eligible records sorted ascending by test date. Records sharing a date
        keep their input order.
    """

    selected = [
        record
        for record in records
        if (grade is None or record.grade == grade) and is_chart_eligible(record)
    ]
    selected.sort(key=lambda r: r.test_date)
    return tuple(selected)


def is_renderable(records: tuple[ScoreRecord, ...]) -> bool:
    """Return True when enough records were selected to draw a trend."""

    return len(records) >= MIN_CHART_RECORDS
