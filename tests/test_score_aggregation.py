import logging
from types import SimpleNamespace

import pytest

from services.score_aggregation import (
    UNGRADED_LABEL,
    ScoreMode,
    aggregate,
    classify,
    resolve_mode,
    round_half_up,
    summarize,
)


# ==========================================================
# aggregate
# ==========================================================

def test_aggregate_empty_record_is_none():
    assert aggregate({}) is None
    assert aggregate({"quiz1": None, "mid": None}, ScoreMode.BILINGUAL) is None


def test_aggregate_counts_zero_as_score():
    # 0 은 "없음"이 아니라 정상 점수
    assert aggregate({"quiz1": 0}) == 0
    assert aggregate({"quiz1": 0, "quiz2": 100}) == 50


def test_aggregate_regular_example():
    record = {"quiz1": 70, "quiz2": 80, "quiz3": 90, "mid": 85, "final": 95}
    assert aggregate(record, ScoreMode.REGULAR) == 84


def test_aggregate_rounds_half_up():
    # 84.5 → 85 (banker's rounding 이면 84)
    assert aggregate({"mid": 84, "final": 85}) == 85
    assert aggregate({"mid": 0, "final": 1}) == 1


def test_aggregate_includes_participation_speaking_listening():
    record = {"participation": 60, "speaking": 80, "listening": 100}
    assert aggregate(record) == 80


def test_aggregate_mode_selects_field_set():
    record = {"quiz1": 80, "reading": 100}
    assert aggregate(record, ScoreMode.REGULAR) == 80
    assert aggregate(record, ScoreMode.BILINGUAL) == 90


def test_aggregate_is_order_invariant():
    a = {"quiz1": 61, "mid": 77, "final": 93, "maths": 40}
    b = dict(reversed(list(a.items())))
    assert aggregate(a, ScoreMode.BILINGUAL) == aggregate(b, ScoreMode.BILINGUAL)


def test_aggregate_reads_attributes():
    record = SimpleNamespace(quiz1=90, quiz2=None, mid=70, student_id=1)
    assert aggregate(record) == 80


def test_aggregate_excludes_out_of_range_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="services.score_aggregation"):
        assert aggregate({"quiz1": 150, "quiz2": -5, "mid": 80, "student_id": 7}) == 80
    assert "quiz1=150" in caplog.text
    assert "quiz2=-5" in caplog.text


def test_aggregate_only_invalid_values_is_none():
    assert aggregate({"quiz1": 101, "final": "A", "mid": True}) is None


@pytest.mark.parametrize("values", [[0], [100], [0, 100, 55], [99, 100, 100, 100]])
def test_aggregate_result_within_range(values):
    record = dict(zip(["quiz1", "quiz2", "quiz3", "mid"], values))
    result = aggregate(record)
    assert isinstance(result, int)
    assert 0 <= result <= 100


# ==========================================================
# classify
# ==========================================================

def test_classify_none():
    assert classify(None) is None


@pytest.mark.parametrize(
    "score, letter",
    [
        (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"),
        (69, "D"), (60, "D"), (59, "E"), (0, "E"),
    ],
)
def test_classify_band_edges(score, letter):
    assert classify(score).letter == letter


def test_classify_labels():
    assert classify(95).tier_label == "Excellent"
    assert classify(85).tier_label == "Good"
    assert classify(75).tier_label == "Fair"
    assert classify(65).tier_label == "Needs Improvement"
    assert classify(10).tier_label == "Unsatisfactory"
    assert classify(10).color == "red"


def test_classify_outside_range_is_total():
    assert classify(120).letter == "A"
    assert classify(-3).letter == "E"


# ==========================================================
# pipeline / helpers
# ==========================================================

def test_summarize_end_to_end():
    summary = summarize({"quiz1": 70, "quiz2": 80, "quiz3": 90, "mid": 85, "final": 95})
    assert summary.average == 84
    assert summary.letter == "B"
    assert summary.to_dict()["label"] == "Good"


def test_summarize_ungraded():
    summary = summarize({})
    assert summary.average is None
    assert summary.letter is None
    assert summary.to_dict()["label"] == UNGRADED_LABEL
    assert summarize(None).is_graded is False


@pytest.mark.parametrize(
    "class_type, class_name, expected",
    [
        ("BILINGUAL", None, ScoreMode.BILINGUAL),
        ("bilingual", "7A", ScoreMode.BILINGUAL),
        ("REGULAR", "Kelas 8 Bilingual", ScoreMode.BILINGUAL),
        ("REGULAR", "8B", ScoreMode.REGULAR),
        (None, None, ScoreMode.REGULAR),
    ],
)
def test_resolve_mode(class_type, class_name, expected):
    assert resolve_mode(class_type, class_name) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(8.25, 1) == 8.3
    assert round_half_up(7.04, 1) == 7.0
