from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.teacher_reviews import SchoolTeacherReview as ReviewModel
from models.teachers import Teacher as TeacherModel
from schemas.teachers import Teacher as TeacherSchema, TeacherCreate

router = APIRouter(prefix="/teachers", tags=["교사 정보"])


# ==========================================================
# [1단계] CRUD 라우터
# ==========================================================

# ✅ [CREATE] 교사 정보 추가
@router.post("/")
def create_teacher(teacher: TeacherCreate, db: Session = Depends(get_db)):
    db_teacher = TeacherModel(**teacher.model_dump())
    db.add(db_teacher)
    db.commit()
    db.refresh(db_teacher)
    return {
        "success": True,
        "data": TeacherSchema.model_validate(db_teacher).model_dump(),
        "message": "Guru berhasil ditambahkan",
    }


# ✅ [READ] 전체 교사 조회
@router.get("/")
def read_teachers(location_id: int = None, db: Session = Depends(get_db)):
    query = db.query(TeacherModel)
    if location_id is not None:
        query = query.filter(TeacherModel.location_id == location_id)
    return {
        "success": True,
        "data": [TeacherSchema.model_validate(r).model_dump() for r in query.order_by(TeacherModel.name).all()],
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 교사 상세 조회
@router.get("/{teacher_id}")
def read_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    if teacher is None:
        return {"success": False, "error": {"code": 404, "message": "Guru tidak ditemukan"}}
    return {"success": True, "data": TeacherSchema.model_validate(teacher).model_dump()}


# ✅ [UPDATE] 교사 정보 수정
@router.put("/{teacher_id}")
def update_teacher(teacher_id: int, updated: TeacherCreate, db: Session = Depends(get_db)):
    teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    if teacher is None:
        return {"success": False, "error": {"code": 404, "message": "Guru tidak ditemukan"}}

    for key, value in updated.model_dump().items():
        setattr(teacher, key, value)

    db.commit()
    db.refresh(teacher)
    return {"success": True, "data": TeacherSchema.model_validate(teacher).model_dump()}


# ✅ [DELETE] 교사 삭제
@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    if teacher is None:
        return {"success": False, "error": {"code": 404, "message": "Guru tidak ditemukan"}}

    # 평가 기록이 남아 있으면 삭제 불가 (FK)
    if db.query(ReviewModel).filter(ReviewModel.teacher_id == teacher_id).first():
        return {"success": False, "error": {"code": 409, "message": "Guru masih memiliki data penilaian"}}

    db.delete(teacher)
    db.commit()
    return {"success": True, "data": {"teacher_id": teacher_id}, "message": "Guru berhasil dihapus"}
