"""Score record decoding and draw-list encoding tests."""

from __future__ import annotations

import json
import re
from datetime import date, timedelta, timezone

import pytest

from analysis.dto import Subject
from core.charting.codec import ScoreRecordPayloadError, decode_score_records, encode_draw_list
from core.charting.render import render_deviation_chart

pytestmark = pytest.mark.unit


def _document(**overrides: object) -> dict[str, object]:
    document: dict[str, object] = {
        "firestoreId": "doc-1",
        "testName": "組分けテスト",
        "testDate": "2025-01-12",
        "grade": "4年生",
        "scores": {"kokugo": "120", "sansu": 130, "rika": "", "shakai": None},
        "maxScores": {"kokugo": 150, "sansu": 150, "rika": None, "shakai": None},
        "twoSubjects": {"score": "250", "maxScore": "300", "deviation": "", "rank": None, "totalStudents": None},
        "fourSubjects": {"score": 400, "maxScore": 500, "deviation": "52.4", "rank": "812", "totalStudents": "5400"},
        "deviations": {"kokugo": "55.1", "sansu": "", "rika": None, "shakai": 48},
        "course": "",
        "className": "α1",
        "notes": "",
    }
    document.update(overrides)
    return document


def test_decode_persistence_document() -> None:
    """Blank and null fields become absent; numeric strings are parsed."""

    (record,) = decode_score_records([_document()])
    assert record.id == "doc-1"
    assert record.test_date == date(2025, 1, 12)
    assert record.grade == "4年生"
    assert record.scores.get(Subject.kokugo) == 120.0
    assert record.scores.get(Subject.rika) is None
    assert record.deviations.get(Subject.kokugo) == 55.1
    assert record.deviations.get(Subject.sansu) is None
    assert record.deviations.get(Subject.shakai) == 48.0
    assert record.four_subjects is not None
    assert record.four_subjects.deviation == 52.4
    assert record.four_subjects.rank == 812
    assert record.four_subjects.cohort_size == 5400
    assert record.two_subjects is not None
    assert record.two_subjects.deviation is None
    assert record.class_name == "α1"


def test_decode_accepts_timestamps_and_missing_sections() -> None:
    """ISO timestamps without a target timezone keep their own date; missing sections are empty."""

    (record,) = decode_score_records([{"id": 7, "testDate": "2025-02-03T09:00:00Z"}])
    assert record.id == "7"
    assert record.test_date == date(2025, 2, 3)
    assert record.four_subjects is None
    assert record.deviations.get(Subject.rika) is None


def test_decode_dates_aware_timestamps_in_target_timezone() -> None:
    """An evening UTC timestamp falls on the next day in Tokyo; naive timestamps are left alone."""

    tokyo = timezone(timedelta(hours=9))
    late, naive, plain = decode_score_records(
        [
            {"testDate": "2025-02-03T20:00:00Z"},
            {"testDate": "2025-02-03T20:00:00"},
            {"testDate": "2025-02-03"},
        ],
        tz=tokyo,
    )
    assert late.test_date == date(2025, 2, 4)
    assert naive.test_date == date(2025, 2, 3)
    assert plain.test_date == date(2025, 2, 3)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"records": []}, "Expected a list"),
        ([42], "records[0]: Expected an object"),
        ([{"testDate": ""}], "records[0]: testDate is required"),
        ([{"testDate": "12/01/2025"}], "is not an ISO date"),
        ([_document(), _document(deviations={"kokugo": "abc"})], "records[1]: deviations.kokugo"),
        ([_document(fourSubjects={"deviation": [50]})], "fourSubjects.deviation must be a number"),
        ([_document(fourSubjects={"deviation": "nan"})], "fourSubjects.deviation must be a finite number"),
        ([_document(fourSubjects={"deviation": "inf"})], "fourSubjects.deviation must be a finite number"),
        ([_document(deviations={"rika": "-Infinity"})], "deviations.rika must be a finite number"),
        ([_document(scores={"sansu": float("nan")})], "scores.sansu must be a finite number"),
        ([_document(fourSubjects={"deviation": 10**400})], "fourSubjects.deviation must be a finite number"),
    ],
)
def test_decode_rejects_malformed_payloads(payload: object, message: str) -> None:
    """Structural problems raise ScoreRecordPayloadError with the record position."""

    with pytest.raises(ScoreRecordPayloadError, match=re.escape(message)):
        decode_score_records(payload)


def test_encode_draw_list_is_json_serializable() -> None:
    """Encoded draw lists survive a JSON round trip unchanged."""

    records = decode_score_records(
        [
            _document(testDate="2025-01-12"),
            _document(
                firestoreId="doc-2",
                testDate="2025-02-09",
                fourSubjects={"deviation": 57},
                deviations={},
            ),
        ]
    )
    chart = render_deviation_chart(records)
    assert chart is not None

    payload = encode_draw_list(chart)
    assert json.loads(json.dumps(payload)) == payload
    assert payload["canvas"] == {
        "width": 600,
        "height": 300,
        "margin": {"top": 30, "right": 20, "bottom": 60, "left": 50},
    }
    assert [series["metric"] for series in payload["series"]] == ["four_subjects"]
    assert payload["series"][0]["path"].startswith("M 50 ")
    assert [entry["label"] for entry in payload["legend"]] == ["4科目"]
    assert payload["grid"]["showThreshold"] is True
