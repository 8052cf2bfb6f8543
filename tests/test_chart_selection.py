"""Record selection tests for the deviation chart."""

from __future__ import annotations

from datetime import date

import pytest

from analysis.dto import AggregateScore, ScoreRecord
from analysis.selection import is_chart_eligible, is_renderable, select_chart_records

pytestmark = pytest.mark.unit


def test_selection_keeps_records_with_an_aggregate_deviation(make_record) -> None:
    """Records without either aggregate deviation are dropped."""

    four_only = make_record(date(2025, 1, 1), four=50.0)
    two_only = make_record(date(2025, 2, 1), two=48.0)
    subject_only = make_record(date(2025, 3, 1), kokugo=55.0)

    selected = select_chart_records([four_only, two_only, subject_only])
    assert selected == (four_only, two_only)
    assert is_chart_eligible(subject_only) is False


def test_selection_ignores_aggregates_without_deviation() -> None:
    """An aggregate carrying only a raw score does not make a record eligible."""

    record = ScoreRecord(
        id="a",
        test_date=date(2025, 1, 1),
        four_subjects=AggregateScore(score=320.0, max_score=500.0),
    )
    assert is_chart_eligible(record) is False


def test_selection_sorts_by_test_date_without_mutating_input(make_record) -> None:
    """Selection returns a new, date-ordered tuple."""

    march = make_record(date(2025, 3, 1), four=55.0)
    january = make_record(date(2025, 1, 1), four=48.0)
    february = make_record(date(2025, 2, 1), four=52.0)
    records = [march, january, february]

    selected = select_chart_records(records)
    assert [r.test_date.month for r in selected] == [1, 2, 3]
    assert records == [march, january, february]


def test_selection_scopes_to_grade(make_record) -> None:
    """Records from other grades are excluded when a grade is requested."""

    fourth = make_record(date(2025, 1, 1), four=50.0, grade="4年生")
    fifth = make_record(date(2025, 2, 1), four=52.0, grade="5年生")

    assert select_chart_records([fourth, fifth], grade="5年生") == (fifth,)
    assert select_chart_records([fourth, fifth]) == (fourth, fifth)


def test_renderable_requires_two_records(make_record) -> None:
    """Fewer than two selected records cannot form a trend."""

    one = make_record(date(2025, 1, 1), four=50.0)
    two = make_record(date(2025, 2, 1), four=51.0)

    assert is_renderable(()) is False
    assert is_renderable((one,)) is False
    assert is_renderable((one, two)) is True
