"""Pure analysis package for the deviation trend chart.

This package contains deterministic, testable computations that operate on
in-memory score records and return DTOs. It must not import Django or perform
any database I/O.
"""

from .dto import ScoreRecord
from .metrics import Metric
from .selection import select_chart_records

__all__ = ["Metric", "ScoreRecord", "select_chart_records"]
