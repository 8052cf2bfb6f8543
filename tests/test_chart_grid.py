"""Gridline planning tests."""

from __future__ import annotations

import pytest

from analysis.dto import ValueDomain
from analysis.grid import grid_step, plan_grid

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("span", "expected"),
    [(25, 5), (21, 5), (20, 2), (15, 2), (11, 2), (10, 1), (7, 1), (1, 1)],
)
def test_grid_step_by_domain_width(span: int, expected: int) -> None:
    """Wider domains use coarser gridline steps."""

    assert grid_step(span) == expected


def test_grid_levels_are_step_multiples_within_domain() -> None:
    """Levels start at the first multiple of the step at or above the minimum."""

    plan = plan_grid(ValueDomain(min=45, max=58))
    assert plan.step == 2
    assert plan.levels == (46, 48, 50, 52, 54, 56, 58)

    plan = plan_grid(ValueDomain(min=42, max=68))
    assert plan.step == 5
    assert plan.levels == (45, 50, 55, 60, 65)

    plan = plan_grid(ValueDomain(min=47, max=54))
    assert plan.step == 1
    assert plan.levels == tuple(range(47, 55))


def test_threshold_flag_inside_domain() -> None:
    """The threshold is flagged only when strictly inside the domain."""

    assert plan_grid(ValueDomain(min=40, max=60)).show_threshold is True
    assert plan_grid(ValueDomain(min=55, max=70)).show_threshold is False
    assert plan_grid(ValueDomain(min=50, max=60)).show_threshold is False
    assert plan_grid(ValueDomain(min=30, max=50)).show_threshold is False
