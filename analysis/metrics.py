"""Metric definitions for the deviation chart.

The chart tracks a closed set of six metrics: the two aggregate deviation
indices and one deviation index per subject. Values are looked up through a
fixed table keyed by metric rather than by free-form attribute access.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Final

from .dto import ScoreRecord, Subject


class Metric(StrEnum):
    """Tracked chart metric.

    Values are stable identifiers used by the style table and the JSON output.
    """

    four_subjects = "four_subjects"
    two_subjects = "two_subjects"
    kokugo = "kokugo"
    sansu = "sansu"
    rika = "rika"
    shakai = "shakai"


SUBJECT_METRICS: Final[tuple[Metric, ...]] = (
    Metric.kokugo,
    Metric.sansu,
    Metric.rika,
    Metric.shakai,
)

AGGREGATE_METRICS: Final[tuple[Metric, ...]] = (
    Metric.four_subjects,
    Metric.two_subjects,
)

# Subjects are drawn beneath the aggregates; four-subject ends up on top.
DRAW_ORDER: Final[tuple[Metric, ...]] = SUBJECT_METRICS + (
    Metric.two_subjects,
    Metric.four_subjects,
)

LEGEND_ORDER: Final[tuple[Metric, ...]] = AGGREGATE_METRICS + SUBJECT_METRICS


def _four_subject_deviation(record: ScoreRecord) -> float | None:
    if record.four_subjects is None:
        return None
    return record.four_subjects.deviation


def _two_subject_deviation(record: ScoreRecord) -> float | None:
    if record.two_subjects is None:
        return None
    return record.two_subjects.deviation


def _subject_deviation(subject: Subject) -> Callable[[ScoreRecord], float | None]:
    def extract(record: ScoreRecord) -> float | None:
        return record.deviations.get(subject)

    return extract


METRIC_EXTRACTORS: Final[dict[Metric, Callable[[ScoreRecord], float | None]]] = {
    Metric.four_subjects: _four_subject_deviation,
    Metric.two_subjects: _two_subject_deviation,
    Metric.kokugo: _subject_deviation(Subject.kokugo),
    Metric.sansu: _subject_deviation(Subject.sansu),
    Metric.rika: _subject_deviation(Subject.rika),
    Metric.shakai: _subject_deviation(Subject.shakai),
}


def metric_value(record: ScoreRecord, metric: Metric) -> float | None:
    """Return the deviation index recorded for `metric`.

    Args:
        record: Score record to read.
        metric: Metric to look up.

    Returns:
        The deviation index, or None when the record does not carry it.
    """

    return METRIC_EXTRACTORS[metric](record)
