from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.locations import Location as LocationModel
from models.teacher_reviews import SchoolTeacherReview as ReviewModel
from models.teachers import Teacher as TeacherModel
from schemas.common import Pagination, paginate
from schemas.teacher_reviews import (
    TeacherReview as ReviewSchema,
    TeacherReviewCreate,
    TeacherReviewUpdate,
)
from services.teacher_ranking import (
    RATING_LABELS,
    current_review_month,
    days_until_review_end,
    is_review_period,
    rank_teachers,
    review_average,
    teachers_of_the_month,
)

router = APIRouter(prefix="/teacher_reviews", tags=["교사 평가"])


def _review_out(review: ReviewModel) -> dict:
    data = ReviewSchema.model_validate(review).model_dump()
    data["average_rating"] = review_average(review)
    return data


def _attach_profiles(db: Session, rows: list) -> list:
    """순위 결과에 교사/학교 정보 붙이기"""
    teacher_ids = {r["teacher_id"] for r in rows}
    school_ids = {r["school_id"] for r in rows}
    teachers = {t.id: t for t in db.query(TeacherModel).filter(TeacherModel.id.in_(teacher_ids)).all()} if teacher_ids else {}
    schools = {s.id: s for s in db.query(LocationModel).filter(LocationModel.id.in_(school_ids)).all()} if school_ids else {}

    for r in rows:
        t = teachers.get(r["teacher_id"])
        s = schools.get(r["school_id"])
        r["teacher"] = {"id": t.id, "name": t.name, "email": t.email, "photo_url": t.photo_url} if t else None
        r["school"] = {"id": s.id, "name": s.name} if s else None
    return rows


# ==========================================================
# [1단계] 정적 라우터 (평가 기간 / 순위)
# ==========================================================

# ✅ [PERIOD] 이번 달 평가 기간 정보
@router.get("/period")
def get_review_period():
    today = date.today()
    start_day = settings.REVIEW_PERIOD_START_DAY
    return {
        "success": True,
        "data": {
            "review_month": current_review_month(today).isoformat(),
            "is_review_period": is_review_period(today, start_day),
            "days_until_end": days_until_review_end(today, start_day),
            "rating_labels": RATING_LABELS,
        },
    }


# ✅ [RANKING] 학교별 교사 평균 순위
@router.get("/ranking")
def get_teacher_ranking(school_id: int, review_month: Optional[date] = None, db: Session = Depends(get_db)):
    month = (review_month or current_review_month()).replace(day=1)
    reviews = (
        db.query(ReviewModel)
        .filter(ReviewModel.school_id == school_id, ReviewModel.review_month == month)
        .all()
    )
    ranking = _attach_profiles(db, rank_teachers(reviews))
    return {
        "success": True,
        "data": {"school_id": school_id, "review_month": month.isoformat(), "teachers": ranking},
    }


# ✅ [TEACHER OF THE MONTH] 전체 학교의 이달의 교사 (홈페이지용)
@router.get("/teacher-of-the-month")
def get_teachers_of_the_month(review_month: Optional[date] = None, db: Session = Depends(get_db)):
    month = (review_month or current_review_month()).replace(day=1)
    reviews = db.query(ReviewModel).filter(ReviewModel.review_month == month).all()
    winners = _attach_profiles(db, teachers_of_the_month(reviews))
    return {"success": True, "data": {"review_month": month.isoformat(), "teachers": winners}}


# ==========================================================
# [2단계] CRUD 라우터
# ==========================================================

# ✅ [CREATE] 평가 등록 (평가자/교사/학교/월 당 1건)
@router.post("/")
def create_review(review: TeacherReviewCreate, db: Session = Depends(get_db)):
    existing = (
        db.query(ReviewModel)
        .filter(
            ReviewModel.reviewer_id == review.reviewer_id,
            ReviewModel.teacher_id == review.teacher_id,
            ReviewModel.school_id == review.school_id,
            ReviewModel.review_month == review.review_month,
        )
        .first()
    )
    if existing:
        return {
            "success": False,
            "error": {"code": 409, "message": "Guru ini sudah dinilai untuk bulan ini"},
        }

    teacher = db.query(TeacherModel).filter(TeacherModel.id == review.teacher_id).first()
    if teacher is None:
        return {"success": False, "error": {"code": 404, "message": "Guru tidak ditemukan"}}

    school = db.query(LocationModel).filter(LocationModel.id == review.school_id).first()
    if school is None:
        return {"success": False, "error": {"code": 404, "message": "Sekolah tidak ditemukan"}}

    db_review = ReviewModel(**review.model_dump())
    db.add(db_review)
    db.commit()
    db.refresh(db_review)
    return {"success": True, "data": _review_out(db_review), "message": "Penilaian berhasil dikirim"}


# ✅ [READ] 평가 목록 (학교/교사/평가자/월 필터)
@router.get("/")
def list_reviews(
    school_id: Optional[int] = None,
    teacher_id: Optional[int] = None,
    reviewer_id: Optional[int] = None,
    review_month: Optional[date] = None,
    p: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    query = db.query(ReviewModel)
    if school_id is not None:
        query = query.filter(ReviewModel.school_id == school_id)
    if teacher_id is not None:
        query = query.filter(ReviewModel.teacher_id == teacher_id)
    if reviewer_id is not None:
        query = query.filter(ReviewModel.reviewer_id == reviewer_id)
    if review_month is not None:
        query = query.filter(ReviewModel.review_month == review_month.replace(day=1))

    reviews, meta = paginate(query.order_by(ReviewModel.review_month.desc(), ReviewModel.id.desc()), p)
    return {"success": True, "data": [_review_out(r) for r in reviews], "meta": meta.model_dump()}


# ==========================================================
# [3단계] 완전 동적 라우터
# ==========================================================

# ✅ [READ] 평가 상세
@router.get("/{review_id}")
def read_review(review_id: int, db: Session = Depends(get_db)):
    review = db.query(ReviewModel).filter(ReviewModel.id == review_id).first()
    if review is None:
        return {"success": False, "error": {"code": 404, "message": "Review not found"}}
    return {"success": True, "data": _review_out(review)}


# ✅ [UPDATE] 점수/코멘트 수정
@router.put("/{review_id}")
def update_review(review_id: int, updated: TeacherReviewUpdate, db: Session = Depends(get_db)):
    review = db.query(ReviewModel).filter(ReviewModel.id == review_id).first()
    if review is None:
        return {"success": False, "error": {"code": 404, "message": "Review not found"}}

    for key, value in updated.model_dump().items():
        setattr(review, key, value)

    db.commit()
    db.refresh(review)
    return {"success": True, "data": _review_out(review), "message": "Review updated successfully"}


# ✅ [DELETE] 평가 삭제
@router.delete("/{review_id}")
def delete_review(review_id: int, db: Session = Depends(get_db)):
    review = db.query(ReviewModel).filter(ReviewModel.id == review_id).first()
    if review is None:
        return {"success": False, "error": {"code": 404, "message": "Review not found"}}

    db.delete(review)
    db.commit()
    return {"success": True, "data": {"review_id": review_id, "message": "Review deleted successfully"}}
