from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)               # 고유 학생 ID (Primary Key)
    name = Column(String(100), nullable=False)                      # 학생 이름
    email = Column(String(100), unique=True)                        # 로그인 이메일
    school_name = Column(String(150))                               # 출신 학교 (school_origin)
    class_name = Column(String(100))                                # 반 이름 (branch)
    class_type = Column(String(20), nullable=False, default="REGULAR")  # 수업 유형 (REGULAR / BILINGUAL)
    location_id = Column(Integer, ForeignKey("locations.id"))       # 배정 지점/학교 ID
    parent_id = Column(Integer)                                     # 학부모 계정 ID
