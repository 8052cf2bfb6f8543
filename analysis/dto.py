"""DTO types consumed and produced by the chart transform.

DTOs are plain data containers used to transport score records into the
transform and derived chart values out of it. They intentionally avoid any
Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class Subject(StrEnum):
    """Tested subject.

    Values are stable identifiers shared with the persistence layer.
    """

    kokugo = "kokugo"
    sansu = "sansu"
    rika = "rika"
    shakai = "shakai"


@dataclass(frozen=True, slots=True)
class SubjectValues:
    """One optional numeric value per subject.

    Attributes:
        kokugo: Value for Japanese, or None when absent.
        sansu: Value for arithmetic, or None when absent.
        rika: Value for science, or None when absent.
        shakai: Value for social studies, or None when absent.
    """

    kokugo: float | None = None
    sansu: float | None = None
    rika: float | None = None
    shakai: float | None = None

    def get(self, subject: Subject) -> float | None:
        """Return the value recorded for `subject`, if any."""

        return getattr(self, subject.value)


@dataclass(frozen=True, slots=True)
class AggregateScore:
    """Combined result across several subjects.

    Attributes:
        score: Combined raw score.
        max_score: Combined maximum score.
        deviation: Deviation index for the combined score.
        rank: Rank within the cohort.
        cohort_size: Number of students ranked.
    """

    score: float | None = None
    max_score: float | None = None
    deviation: float | None = None
    rank: int | None = None
    cohort_size: int | None = None


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    """One assessment event for a child.

    Attributes:
        id: Opaque identifier assigned by the persistence layer.
        test_date: Calendar date the test was sat.
        grade: Enrollment-year label (e.g. "4年生").
        test_name: Display name of the test.
        scores: Per-subject raw scores.
        max_scores: Per-subject maximum scores.
        deviations: Per-subject deviation indices.
        two_subjects: Two-subject aggregate, when reported.
        four_subjects: Four-subject aggregate, when reported.
        course: Free-text course label.
        class_name: Free-text class label.
        notes: Free-text notes.
    """

    id: str
    test_date: date
    grade: str = ""
    test_name: str = ""
    scores: SubjectValues = SubjectValues()
    max_scores: SubjectValues = SubjectValues()
    deviations: SubjectValues = SubjectValues()
    two_subjects: AggregateScore | None = None
    four_subjects: AggregateScore | None = None
    course: str = ""
    class_name: str = ""
    notes: str = ""


@dataclass(frozen=True, slots=True)
class ChartLayout:
    """Logical canvas geometry for the deviation chart.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        margin_top: Space above the plot area.
        margin_right: Space right of the plot area.
        margin_bottom: Space below the plot area (date labels live here).
        margin_left: Space left of the plot area (value labels live here).
    """

    width: int = 600
    height: int = 300
    margin_top: int = 30
    margin_right: int = 20
    margin_bottom: int = 60
    margin_left: int = 50

    @property
    def plot_left(self) -> float:
        return float(self.margin_left)

    @property
    def plot_right(self) -> float:
        return float(self.width - self.margin_right)

    @property
    def plot_top(self) -> float:
        return float(self.margin_top)

    @property
    def plot_bottom(self) -> float:
        return float(self.height - self.margin_bottom)

    @property
    def plot_width(self) -> float:
        return float(self.width - self.margin_left - self.margin_right)

    @property
    def plot_height(self) -> float:
        return float(self.height - self.margin_top - self.margin_bottom)


DEFAULT_LAYOUT = ChartLayout()


@dataclass(frozen=True, slots=True)
class ValueDomain:
    """Padded, integer-aligned value range shown on the Y axis.

    Attributes:
        min: Lower bound (floored).
        max: Upper bound (ceiled).
    """

    min: int
    max: int

    @property
    def span(self) -> int:
        """Return `max - min`, or 1 when the bounds coincide."""

        return (self.max - self.min) or 1


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    """A plotted point of a metric series.

    Attributes:
        x: Horizontal pixel coordinate.
        y: Vertical pixel coordinate.
        value: Underlying deviation index.
        record_index: Position of the source record in the selected list.
    """

    x: float
    y: float
    value: float
    record_index: int


@dataclass(frozen=True, slots=True)
class GridPlan:
    """Horizontal reference lines for the Y axis.

    Attributes:
        step: Distance between consecutive levels.
        levels: Values to draw, ascending.
        show_threshold: Whether the threshold lies strictly inside the domain.
        threshold: The highlighted level.
    """

    step: int
    levels: tuple[int, ...]
    show_threshold: bool
    threshold: int = 50
