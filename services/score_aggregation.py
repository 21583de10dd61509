"""
services/score_aggregation.py

- 학생 성적(ScoreRecord) → 평균 점수 → 등급(A~E) 으로 이어지는 순수 계산 모듈
- 모든 라우터(학생/학부모/관리자 성적 화면)가 이 모듈 하나만 import 해서 사용
- DB/IO 없음. ORM 객체나 dict 어느 쪽이든 입력으로 받음
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


# =========================================================
# 1) 수업 유형(모드) / 필드 세트
# =========================================================

class ScoreMode(str, Enum):
    REGULAR = "regular"
    BILINGUAL = "bilingual"


BASE_FIELDS = (
    "quiz1", "quiz2", "quiz3", "participation",
    "mid", "final", "speaking", "listening",
)
BILINGUAL_FIELDS = ("reading", "writing", "maths", "science")

MIN_SCORE = 0
MAX_SCORE = 100

# 화면에서 "미채점" 상태로 표시할 문구
UNGRADED_LABEL = "Belum ada nilai"


def fields_for(mode: ScoreMode) -> tuple:
    if mode == ScoreMode.BILINGUAL:
        return BASE_FIELDS + BILINGUAL_FIELDS
    return BASE_FIELDS


def resolve_mode(class_type: Optional[str] = None, class_name: Optional[str] = None) -> ScoreMode:
    """
    학생 프로필의 class_type / 반 이름으로 모드를 한 번만 결정
    - class_type == "BILINGUAL" 이거나 반 이름에 "bilingual" 포함 → BILINGUAL
    - 그 외 → REGULAR
    """
    if class_type and class_type.strip().upper() == "BILINGUAL":
        return ScoreMode.BILINGUAL
    if class_name and "bilingual" in class_name.lower():
        return ScoreMode.BILINGUAL
    return ScoreMode.REGULAR


# =========================================================
# 2) 반올림 (JS Math.round 와 동일한 half-up)
# =========================================================

def round_half_up(value, places: int = 0):
    """
    파이썬 round()는 banker's rounding 이라 84.5 → 84 가 됨
    - places == 0 이면 int, 아니면 float 반환
    """
    quant = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


# =========================================================
# 3) ScoreAggregator
# =========================================================

def _field_value(record: Any, name: str):
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _is_valid_score(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return MIN_SCORE <= value <= MAX_SCORE


def present_scores(record: Any, mode: ScoreMode = ScoreMode.REGULAR) -> dict:
    """
    모드에 해당하는 필드 중 값이 있는 것만 {필드명: 점수} 로 반환
    - None 은 "없음" (0 은 정상 점수로 포함)
    - 범위를 벗어난 값은 제외하고 경고 로그
    """
    scores = {}
    for name in fields_for(mode):
        value = _field_value(record, name)
        if value is None:
            continue
        if not _is_valid_score(value):
            logger.warning(
                "Ignoring invalid score %s=%r (student_id=%s)",
                name, value, _field_value(record, "student_id"),
            )
            continue
        scores[name] = value
    return scores


def aggregate(record: Any, mode: ScoreMode = ScoreMode.REGULAR) -> Optional[int]:
    """존재하는 점수들의 평균(정수, half-up). 점수가 하나도 없으면 None"""
    scores = present_scores(record, mode)
    if not scores:
        return None
    total = sum(Decimal(str(v)) for v in scores.values())
    return round_half_up(total / len(scores))


# =========================================================
# 4) GradeClassifier
# =========================================================

@dataclass(frozen=True)
class GradeBand:
    letter: str
    tier_label: str
    color: str
    min_score: int


# 하한 포함(>=), 높은 구간부터 검사
GRADE_BANDS = (
    GradeBand("A", "Excellent", "green", 90),
    GradeBand("B", "Good", "blue", 80),
    GradeBand("C", "Fair", "yellow", 70),
    GradeBand("D", "Needs Improvement", "orange", 60),
    GradeBand("E", "Unsatisfactory", "red", MIN_SCORE),
)


def classify(average: Optional[float]) -> Optional[GradeBand]:
    if average is None:
        return None
    for band in GRADE_BANDS:
        if average >= band.min_score:
            return band
    # 0 미만은 최하 등급
    return GRADE_BANDS[-1]


# =========================================================
# 5) 파이프라인: record → average → letter
# =========================================================

@dataclass(frozen=True)
class GradeSummary:
    average: Optional[int]
    letter: Optional[str]
    tier_label: Optional[str] = None
    color: Optional[str] = None

    @property
    def is_graded(self) -> bool:
        return self.average is not None

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "letter": self.letter,
            "tier_label": self.tier_label,
            "color": self.color,
            "label": self.tier_label if self.is_graded else UNGRADED_LABEL,
        }


UNGRADED = GradeSummary(average=None, letter=None)


def summarize(record: Any, mode: ScoreMode = ScoreMode.REGULAR) -> GradeSummary:
    if record is None:
        return UNGRADED
    average = aggregate(record, mode)
    band = classify(average)
    if band is None:
        return UNGRADED
    return GradeSummary(
        average=average,
        letter=band.letter,
        tier_label=band.tier_label,
        color=band.color,
    )
