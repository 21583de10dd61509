"""
services/teacher_ranking.py

- 학교 측 교사 평가(10개 항목, 1~10점) 집계
- 교사별 그룹핑 → 항목별 평균 → 종합 평균 → 내림차순 정렬 (Teacher of the Month)
- 평가 기간(매월 25일~말일) 계산 헬퍼
"""

from __future__ import annotations

import calendar
from collections import OrderedDict
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional

from services.score_aggregation import round_half_up

RATING_FIELDS = (
    "academic_expertise_rating",
    "communication_rating",
    "empathy_rating",
    "collaboration_rating",
    "dedication_rating",
    "flexibility_rating",
    "classroom_management_rating",
    "creativity_rating",
    "integrity_rating",
    "inclusive_education_rating",
)

RATING_LABELS = {
    "academic_expertise_rating": "Keahlian akademis yang unggul",
    "communication_rating": "Komunikasi yang efektif",
    "empathy_rating": "Empati",
    "collaboration_rating": "Kolaborasi",
    "dedication_rating": "Semangat dan dedikasi",
    "flexibility_rating": "Fleksibilitas",
    "classroom_management_rating": "Manajemen kelas yang baik",
    "creativity_rating": "Kreativitas dan inovasi",
    "integrity_rating": "Integritas dan etika profesional",
    "inclusive_education_rating": "Pemahaman terhadap prinsip pendidikan inklusif",
}

REVIEW_PERIOD_START_DAY = 25


def _get(obj: Any, name: str):
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _avg_key(field: str) -> str:
    # "empathy_rating" → "empathy_avg"
    return field[: -len("_rating")] + "_avg"


# ==========================================================
# [평균 계산]
# ==========================================================

def review_average(review: Any) -> float:
    """평가 1건의 10개 항목 평균 (소수 첫째 자리)"""
    total = sum(_get(review, f) for f in RATING_FIELDS)
    return round_half_up(total / len(RATING_FIELDS), 1)


def rank_teachers(reviews: Iterable[Any]) -> List[dict]:
    """
    교사별 평균 순위
    - 항목별 평균은 소수 첫째 자리에서 반올림
    - 종합 평균 = 항목별 평균(반올림된 값)의 평균
    - 종합 평균 내림차순, 동점이면 teacher_id 오름차순
    """
    grouped: "OrderedDict[Any, list]" = OrderedDict()
    for review in reviews:
        grouped.setdefault(_get(review, "teacher_id"), []).append(review)

    results = []
    for teacher_id, items in grouped.items():
        count = len(items)
        averages = {
            _avg_key(f): round_half_up(sum(_get(r, f) for r in items) / count, 1)
            for f in RATING_FIELDS
        }
        overall = sum(averages.values()) / len(RATING_FIELDS)
        results.append({
            "teacher_id": teacher_id,
            "school_id": _get(items[0], "school_id"),
            "average_rating": round_half_up(overall, 1),
            "review_count": count,
            **averages,
        })

    results.sort(key=lambda x: (-x["average_rating"], x["teacher_id"]))
    for idx, item in enumerate(results, start=1):
        item["rank"] = idx
    return results


def teachers_of_the_month(reviews: Iterable[Any]) -> List[dict]:
    """학교별 1위 교사 목록 (종합 평균 내림차순)"""
    by_school: "OrderedDict[Any, list]" = OrderedDict()
    for review in reviews:
        by_school.setdefault(_get(review, "school_id"), []).append(review)

    winners = []
    for school_id, items in by_school.items():
        ranking = rank_teachers(items)
        if ranking:
            winners.append(ranking[0])

    winners.sort(key=lambda x: (-x["average_rating"], x["school_id"]))
    return winners


# ==========================================================
# [평가 기간]
# ==========================================================

def current_review_month(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today.replace(day=1)


def is_review_period(today: Optional[date] = None,
                     start_day: int = REVIEW_PERIOD_START_DAY) -> bool:
    today = today or date.today()
    return today.day >= start_day


def days_until_review_end(today: Optional[date] = None,
                          start_day: int = REVIEW_PERIOD_START_DAY) -> int:
    today = today or date.today()
    if today.day < start_day:
        return 0
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day
