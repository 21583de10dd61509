from typing import Optional
from pydantic import BaseModel, ConfigDict

class TeacherCreate(BaseModel):
    name: str                               # 교사 이름
    email: Optional[str] = None             # 이메일
    phone: Optional[str] = None             # 전화번호
    photo_url: Optional[str] = None         # 프로필 사진 URL
    location_id: Optional[int] = None       # 주 근무 지점 ID

class Teacher(TeacherCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
