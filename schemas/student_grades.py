from typing import Annotated, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# 점수 입력 경계: 0~100 정수, 미입력은 None
Score = Optional[Annotated[int, Field(ge=0, le=100)]]


class StudentGradeScores(BaseModel):
    # 공통 점수
    quiz1: Score = None
    quiz2: Score = None
    quiz3: Score = None
    participation: Score = None
    mid: Score = None
    final: Score = None
    speaking: Score = None
    listening: Score = None
    # Bilingual 전용
    reading: Score = None
    writing: Score = None
    maths: Score = None
    science: Score = None


# ✅ 입력용 (upsert 키 + 점수)
class StudentGradeInput(StudentGradeScores):
    student_id: int                                                  # 학생 ID
    academic_year: str = Field(..., pattern=r"^\d{4}/\d{4}$")        # 학년도 (예: 2024/2025)
    semester: Literal["1", "2"]                                      # 학기
    school_name: str = Field(..., min_length=1)                      # 학교 이름
    class_name: str = Field(..., min_length=1)                       # 반 이름



# ✅ 출력용 (저장된 값을 그대로 보여줌, 범위 검사 없음)
class StudentGrade(BaseModel):
    id: int
    student_id: int
    academic_year: str
    semester: str
    school_name: str
    class_name: str

    quiz1: Optional[int] = None
    quiz2: Optional[int] = None
    quiz3: Optional[int] = None
    participation: Optional[int] = None
    mid: Optional[int] = None
    final: Optional[int] = None
    speaking: Optional[int] = None
    listening: Optional[int] = None
    reading: Optional[int] = None
    writing: Optional[int] = None
    maths: Optional[int] = None
    science: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
