"""Pytest fixtures shared across the deviation chart tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

import pytest

from analysis.dto import AggregateScore, ScoreRecord, SubjectValues


RecordFactory = Callable[..., ScoreRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """Return a factory building ScoreRecords from flat keyword arguments."""

    counter = iter(range(1, 10_000))

    def factory(
        test_date: date,
        *,
        four: float | None = None,
        two: float | None = None,
        grade: str = "4年生",
        **subject_deviations: float | None,
    ) -> ScoreRecord:
        return ScoreRecord(
            id=f"rec-{next(counter)}",
            test_date=test_date,
            grade=grade,
            four_subjects=AggregateScore(deviation=four) if four is not None else None,
            two_subjects=AggregateScore(deviation=two) if two is not None else None,
            deviations=SubjectValues(**subject_deviations),
        )

    return factory


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django access.
    - `integration`: tests touching Django views or settings.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
