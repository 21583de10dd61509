from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class SchoolTeacherReview(Base):
    __tablename__ = "school_teacher_reviews"  # 학교 측 월간 교사 평가
    __table_args__ = (
        UniqueConstraint(
            "reviewer_id", "teacher_id", "school_id", "review_month",
            name="uq_review_per_month",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    school_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    reviewer_id = Column(Integer, nullable=False)            # 평가자(학교 계정) ID
    review_month = Column(Date, nullable=False, index=True)  # 평가 월 (매월 1일)

    # 평가 항목 10개 (1~10점)
    academic_expertise_rating = Column(Integer, nullable=False)
    communication_rating = Column(Integer, nullable=False)
    empathy_rating = Column(Integer, nullable=False)
    collaboration_rating = Column(Integer, nullable=False)
    dedication_rating = Column(Integer, nullable=False)
    flexibility_rating = Column(Integer, nullable=False)
    classroom_management_rating = Column(Integer, nullable=False)
    creativity_rating = Column(Integer, nullable=False)
    integrity_rating = Column(Integer, nullable=False)
    inclusive_education_rating = Column(Integer, nullable=False)

    comments = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # ✅ 순위 화면에서 교사 이름/사진 표시용 (N:1)
    teacher = relationship("Teacher")
