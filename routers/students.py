from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from database.db import get_db
from models.student_grades import StudentGrade as StudentGradeModel
from models.students import Student as StudentModel
from schemas.students import Student as StudentSchema, StudentCreate
from services.score_aggregation import resolve_mode

router = APIRouter(prefix="/students", tags=["학생 정보"])


def _student_out(s: StudentModel) -> dict:
    data = StudentSchema.model_validate(s).model_dump()
    # 성적 계산 모드는 여기서 한 번만 결정
    data["mode"] = resolve_mode(s.class_type, s.class_name).value
    return data


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생 정보 추가
@router.post("/")
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {"success": True, "data": _student_out(db_student), "message": "Siswa berhasil ditambahkan"}


# ✅ [READ] 전체 학생 조회 (학교/반/지점 필터)
@router.get("/")
def read_students(
    school_name: Optional[str] = None,
    class_name: Optional[str] = None,
    location_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(StudentModel)
    if school_name:
        query = query.filter(StudentModel.school_name == school_name)
    if class_name:
        query = query.filter(StudentModel.class_name == class_name)
    if location_id is not None:
        query = query.filter(StudentModel.location_id == location_id)
    records = query.order_by(StudentModel.name).all()
    return {"success": True, "data": [_student_out(r) for r in records]}


# ==========================================================
# [2단계] 정적 라우터 (검색/통계)
# ==========================================================

# ✅ [SEARCH] 이름으로 학생 검색
@router.get("/search")
def search_students(name: str = None, db: Session = Depends(get_db)):
    query = db.query(StudentModel)
    if name:
        query = query.filter(StudentModel.name.contains(name))
    results = query.all()
    if not results:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}
    return {"success": True, "data": [_student_out(r) for r in results]}


# ✅ [SUMMARY] 학교/반별 학생 수 통계
@router.get("/summary")
def student_summary(db: Session = Depends(get_db)):
    total = db.query(StudentModel).count()
    by_class = (
        db.query(StudentModel.school_name, StudentModel.class_name, func.count(StudentModel.id))
        .group_by(StudentModel.school_name, StudentModel.class_name)
        .all()
    )
    return {
        "success": True,
        "data": {
            "total_students": total,
            "by_class": [
                {"school_name": school, "class_name": cls, "count": cnt}
                for school, cls, cnt in by_class
            ],
        },
    }


# ==========================================================
# [3단계] 완전 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}
    return {"success": True, "data": _student_out(student)}


# ✅ [UPDATE] 특정 학생 정보 수정
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}

    for key, value in updated.model_dump().items():
        setattr(student, key, value)

    db.commit()
    db.refresh(student)
    return {"success": True, "data": _student_out(student), "message": "Data siswa berhasil diperbarui"}


# ✅ [DELETE] 특정 학생 삭제
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}

    # 성적이 남아 있으면 삭제 불가 (FK)
    if db.query(StudentGradeModel).filter(StudentGradeModel.student_id == student_id).first():
        return {"success": False, "error": {"code": 409, "message": "Siswa masih memiliki data nilai"}}

    db.delete(student)
    db.commit()
    return {"success": True, "data": {"student_id": student_id}, "message": "Siswa berhasil dihapus"}
