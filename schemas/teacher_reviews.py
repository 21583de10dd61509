from datetime import date
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

Rating = Annotated[int, Field(ge=1, le=10)]


class TeacherReviewRatings(BaseModel):
    academic_expertise_rating: Rating
    communication_rating: Rating
    empathy_rating: Rating
    collaboration_rating: Rating
    dedication_rating: Rating
    flexibility_rating: Rating
    classroom_management_rating: Rating
    creativity_rating: Rating
    integrity_rating: Rating
    inclusive_education_rating: Rating
    comments: Optional[str] = None


# ✅ 입력용
class TeacherReviewCreate(TeacherReviewRatings):
    teacher_id: int                 # 평가 대상 교사
    school_id: int                  # 평가하는 학교(지점)
    reviewer_id: int                # 평가자 계정
    review_month: date              # 평가 월 → 항상 1일로 정규화

    @field_validator("review_month")
    @classmethod
    def _first_day(cls, v: date) -> date:
        return v.replace(day=1)


# ✅ 수정용 (평가 대상/월은 변경 불가)
class TeacherReviewUpdate(TeacherReviewRatings):
    pass


# ✅ 출력용 (저장된 점수 그대로, 범위 검사 없음)
class TeacherReview(BaseModel):
    id: int
    teacher_id: int
    school_id: int
    reviewer_id: int
    review_month: date

    academic_expertise_rating: int
    communication_rating: int
    empathy_rating: int
    collaboration_rating: int
    dedication_rating: int
    flexibility_rating: int
    classroom_management_rating: int
    creativity_rating: int
    integrity_rating: int
    inclusive_education_rating: int
    comments: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
