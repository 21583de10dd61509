from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from database.db import Base

class StudentGrade(Base):
    __tablename__ = "student_grades"  # 학기별 성적 입력 테이블
    __table_args__ = (
        UniqueConstraint(
            "student_id", "academic_year", "semester", "school_name", "class_name",
            name="uq_student_grade_period",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    academic_year = Column(String(9), nullable=False)      # 학년도 (예: 2024/2025)
    semester = Column(String(1), nullable=False)           # 학기 ("1" / "2")
    school_name = Column(String(150), nullable=False)      # 학교 이름 (조회 필터용)
    class_name = Column(String(100), nullable=False)       # 반 이름 (조회 필터용)

    # 공통 점수 (0~100, 미입력은 NULL)
    quiz1 = Column(Integer)
    quiz2 = Column(Integer)
    quiz3 = Column(Integer)
    participation = Column(Integer)
    mid = Column(Integer)
    final = Column(Integer)
    speaking = Column(Integer)
    listening = Column(Integer)

    # Bilingual 반 전용 점수
    reading = Column(Integer)
    writing = Column(Integer)
    maths = Column(Integer)
    science = Column(Integer)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
