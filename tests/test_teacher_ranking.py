from datetime import date

from services.academic_period import academic_year_options, default_period
from services.teacher_ranking import (
    RATING_FIELDS,
    current_review_month,
    days_until_review_end,
    is_review_period,
    rank_teachers,
    review_average,
    teachers_of_the_month,
)


def make_review(teacher_id, school_id=1, rating=8, **overrides):
    review = {"teacher_id": teacher_id, "school_id": school_id}
    review.update({f: rating for f in RATING_FIELDS})
    review.update(overrides)
    return review


def test_review_average():
    review = make_review(1, rating=7, empathy_rating=10)
    # (9*7 + 10) / 10 = 7.3
    assert review_average(review) == 7.3


def test_rank_teachers_groups_and_sorts():
    reviews = [
        make_review(1, rating=6),
        make_review(2, rating=9),
        make_review(1, rating=8),
        make_review(3, rating=7),
    ]
    ranking = rank_teachers(reviews)

    assert [r["teacher_id"] for r in ranking] == [2, 1, 3]
    assert [r["rank"] for r in ranking] == [1, 2, 3]
    teacher_1 = ranking[1]
    assert teacher_1["review_count"] == 2
    assert teacher_1["empathy_avg"] == 7.0
    assert teacher_1["average_rating"] == 7.0


def test_rank_teachers_dimension_averages_round_to_one_decimal():
    reviews = [make_review(1, rating=8), make_review(1, rating=8), make_review(1, rating=9), make_review(1, rating=8)]
    ranking = rank_teachers(reviews)
    # 33 / 4 = 8.25 → 8.3
    assert ranking[0]["communication_avg"] == 8.3
    assert ranking[0]["average_rating"] == 8.3


def test_rank_teachers_tie_breaks_by_teacher_id():
    ranking = rank_teachers([make_review(5), make_review(2)])
    assert [r["teacher_id"] for r in ranking] == [2, 5]


def test_rank_teachers_empty():
    assert rank_teachers([]) == []


def test_teachers_of_the_month_one_per_school():
    reviews = [
        make_review(1, school_id=10, rating=6),
        make_review(2, school_id=10, rating=9),
        make_review(3, school_id=20, rating=7),
    ]
    winners = teachers_of_the_month(reviews)
    assert [(w["school_id"], w["teacher_id"]) for w in winners] == [(10, 2), (20, 3)]


def test_review_period_helpers():
    assert current_review_month(date(2025, 3, 18)) == date(2025, 3, 1)
    assert is_review_period(date(2025, 3, 24)) is False
    assert is_review_period(date(2025, 3, 25)) is True
    assert days_until_review_end(date(2025, 3, 24)) == 0
    assert days_until_review_end(date(2025, 3, 26)) == 5
    assert days_until_review_end(date(2024, 2, 25)) == 4


def test_default_period():
    assert default_period(date(2024, 8, 1)) == ("2024/2025", "1")
    assert default_period(date(2024, 7, 1)) == ("2024/2025", "1")
    assert default_period(date(2025, 2, 10)) == ("2024/2025", "2")


def test_academic_year_options():
    assert academic_year_options(date(2025, 1, 1)) == [
        "2023/2024", "2024/2025", "2025/2026", "2026/2027",
    ]
