from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# ✅ 입력용 (POST/PUT 등)
class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1)                           # 학생 이름
    email: Optional[str] = None                                    # 로그인 이메일
    school_name: Optional[str] = None                              # 출신 학교
    class_name: Optional[str] = None                               # 반 이름
    class_type: Literal["REGULAR", "BILINGUAL"] = "REGULAR"        # 수업 유형
    location_id: Optional[int] = None                              # 배정 지점 ID
    parent_id: Optional[int] = None                                # 학부모 계정 ID

# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(StudentCreate):
    id: int
    name: str                               # 저장된 값 그대로 출력
    class_type: str = "REGULAR"

    model_config = ConfigDict(from_attributes=True)
