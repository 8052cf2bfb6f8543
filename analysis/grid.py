"""Gridline planning for the deviation chart Y axis."""

from __future__ import annotations

import math

from .dto import GridPlan, ValueDomain

THRESHOLD_LEVEL = 50


def grid_step(span: int) -> int:
    """Pick a readable gridline step for a domain width.

    Args:
        span: Width of the value domain.

    Returns:
        5 for spans above 20, 2 for spans above 10, otherwise 1.
    """

    if span > 20:
        return 5
    if span > 10:
        return 2
    return 1


def plan_grid(domain: ValueDomain, *, threshold: int = THRESHOLD_LEVEL) -> GridPlan:
    """Plan the horizontal reference lines for a domain.

    Args:
        domain: Value domain shown on the Y axis.
        threshold: Level highlighted when it lies strictly inside the domain.

    Returns:
        GridPlan whose levels are every multiple of the step in
        `[domain.min, domain.max]`.
    """

    step = grid_step(domain.span)
    start = math.ceil(domain.min / step) * step
    levels = tuple(range(start, domain.max + 1, step))
    return GridPlan(
        step=step,
        levels=levels,
        show_threshold=domain.min < threshold < domain.max,
        threshold=threshold,
    )
