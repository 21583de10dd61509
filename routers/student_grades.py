import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import get_db
from models.student_grades import StudentGrade as StudentGradeModel
from models.students import Student as StudentModel
from schemas.common import Pagination, paginate
from schemas.student_grades import (
    StudentGrade as StudentGradeSchema,
    StudentGradeInput,
    StudentGradeScores,
)
from services.academic_period import academic_year_options, default_period
from services.score_aggregation import (
    GRADE_BANDS,
    ScoreMode,
    resolve_mode,
    round_half_up,
    summarize,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/student_grades", tags=["학생 성적"])

SCORE_FIELDS = list(StudentGradeScores.model_fields.keys())


# ==========================================================
# [공통] 직렬화 / 모드 결정
# ==========================================================

def _mode_for(student: Optional[StudentModel], class_name: Optional[str] = None) -> ScoreMode:
    if student is None:
        return resolve_mode(None, class_name)
    return resolve_mode(student.class_type, class_name or student.class_name)


def _grade_out(record: StudentGradeModel, mode: ScoreMode) -> dict:
    data = StudentGradeSchema.model_validate(record).model_dump()
    data["mode"] = mode.value
    data["summary"] = summarize(record, mode).to_dict()
    return data


def _students_by_id(db: Session, student_ids) -> dict:
    ids = set(student_ids)
    if not ids:
        return {}
    students = db.query(StudentModel).filter(StudentModel.id.in_(ids)).all()
    return {s.id: s for s in students}


def _period_query(db: Session, academic_year, semester, school_name, class_name):
    query = db.query(StudentGradeModel)
    if academic_year:
        query = query.filter(StudentGradeModel.academic_year == academic_year)
    if semester:
        query = query.filter(StudentGradeModel.semester == semester)
    if school_name:
        query = query.filter(StudentGradeModel.school_name == school_name)
    if class_name:
        query = query.filter(StudentGradeModel.class_name == class_name)
    return query


def _save_grade(db: Session, payload: StudentGradeInput):
    """(학생, 학년도, 학기, 학교, 반) 기준 upsert → (record, created)"""
    existing = (
        db.query(StudentGradeModel)
        .filter(
            StudentGradeModel.student_id == payload.student_id,
            StudentGradeModel.academic_year == payload.academic_year,
            StudentGradeModel.semester == payload.semester,
            StudentGradeModel.school_name == payload.school_name,
            StudentGradeModel.class_name == payload.class_name,
        )
        .first()
    )
    values = payload.model_dump()
    if existing:
        for key in SCORE_FIELDS:
            setattr(existing, key, values[key])
        record, created = existing, False
    else:
        record, created = StudentGradeModel(**values), True
        db.add(record)
    db.commit()
    db.refresh(record)
    return record, created


# ==========================================================
# [1단계] 입력 라우터 (upsert)
# ==========================================================

# ✅ [UPSERT] 학기 성적 저장 (있으면 수정, 없으면 추가)
@router.post("/")
def save_grade(payload: StudentGradeInput, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == payload.student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}

    record, created = _save_grade(db, payload)
    return {
        "success": True,
        "data": _grade_out(record, _mode_for(student, record.class_name)),
        "message": "Nilai berhasil ditambahkan" if created else "Nilai berhasil diperbarui",
    }


# ✅ [BULK] 반 전체 성적 일괄 저장 (실패한 학생은 건너뜀)
@router.post("/bulk")
def save_grades_bulk(payloads: List[StudentGradeInput], db: Session = Depends(get_db)):
    students = _students_by_id(db, [p.student_id for p in payloads])
    saved, failed = 0, []

    for payload in payloads:
        if payload.student_id not in students:
            logger.warning("Skipping grade for unknown student_id=%s", payload.student_id)
            failed.append(payload.student_id)
            continue
        try:
            _save_grade(db, payload)
            saved += 1
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Error saving grade for student_id=%s", payload.student_id)
            failed.append(payload.student_id)

    return {
        "success": True,
        "data": {"saved": saved, "failed": failed},
        "message": f"{saved} nilai semester berhasil disimpan",
    }


# ==========================================================
# [2단계] 정적 조회 라우터 (기간/반 단위)
# ==========================================================

# ✅ [PERIOD] 기본 학년도/학기 + 선택 목록
@router.get("/period")
def get_default_period():
    academic_year, semester = default_period()
    return {
        "success": True,
        "data": {
            "academic_year": academic_year,
            "semester": semester,
            "academic_years": academic_year_options(),
        },
    }


# ✅ [LIST] 반 성적 목록 (각 행에 평균/등급 포함)
@router.get("/")
def list_grades(
    academic_year: Optional[str] = None,
    semester: Optional[str] = None,
    school_name: Optional[str] = None,
    class_name: Optional[str] = None,
    p: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    query = _period_query(db, academic_year, semester, school_name, class_name).order_by(StudentGradeModel.id)
    records, meta = paginate(query, p)
    students = _students_by_id(db, [r.student_id for r in records])
    return {
        "success": True,
        "data": [_grade_out(r, _mode_for(students.get(r.student_id), r.class_name)) for r in records],
        "meta": meta.model_dump(),
        "message": "Daftar nilai berhasil dimuat",
    }


# ✅ [DASHBOARD] 반 성적 요약 (평균/최고/최저/등급 분포/순위)
@router.get("/dashboard")
def get_grades_dashboard(
    academic_year: str = Query(..., description="학년도 (예: 2024/2025)"),
    semester: str = Query(..., description="학기 (1 / 2)"),
    school_name: Optional[str] = None,
    class_name: Optional[str] = None,
    db: Session = Depends(get_db),
):
    records = _period_query(db, academic_year, semester, school_name, class_name).all()
    if not records:
        return {"success": False, "error": {"code": 404, "message": "Belum ada nilai"}}

    students = _students_by_id(db, [r.student_id for r in records])
    distribution = {band.letter: 0 for band in GRADE_BANDS}
    graded, ungraded = [], 0

    for r in records:
        student = students.get(r.student_id)
        summary = summarize(r, _mode_for(student, r.class_name))
        if not summary.is_graded:
            ungraded += 1
            continue
        distribution[summary.letter] += 1
        graded.append({
            "student_id": r.student_id,
            "name": student.name if student else None,
            "average": summary.average,
            "letter": summary.letter,
        })

    averages = [s["average"] for s in graded]
    class_avg = round_half_up(sum(averages) / len(averages), 1) if averages else None

    # ✅ rank 계산 (평균 내림차순)
    ranked = sorted(graded, key=lambda x: x["average"], reverse=True)
    for idx, s in enumerate(ranked, start=1):
        s["rank"] = idx

    return {
        "success": True,
        "data": {
            "academic_year": academic_year,
            "semester": semester,
            "overview": {
                "class_avg": class_avg,
                "highest": max(averages) if averages else None,
                "lowest": min(averages) if averages else None,
                "graded": len(graded),
                "ungraded": ungraded,
            },
            "distribution": distribution,
            "students": ranked,
        },
    }


# ==========================================================
# [3단계] 학생 단위 조회 (학생/학부모 화면)
# ==========================================================

# ✅ [READ] 특정 학생의 학기 성적 + 요약 (없으면 미채점 상태)
@router.get("/student/{student_id}")
def get_student_semester_grade(
    student_id: int,
    academic_year: Optional[str] = None,
    semester: Optional[str] = None,
    db: Session = Depends(get_db),
):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}

    if not academic_year or not semester:
        default_year, default_semester = default_period()
        academic_year = academic_year or default_year
        semester = semester or default_semester

    record = (
        db.query(StudentGradeModel)
        .filter(
            StudentGradeModel.student_id == student_id,
            StudentGradeModel.academic_year == academic_year,
            StudentGradeModel.semester == semester,
        )
        .order_by(StudentGradeModel.updated_at.desc())
        .first()
    )
    mode = _mode_for(student, record.class_name if record else None)
    return {
        "success": True,
        "data": {
            "student_id": student_id,
            "academic_year": academic_year,
            "semester": semester,
            "mode": mode.value,
            "grade": StudentGradeSchema.model_validate(record).model_dump() if record else None,
            "summary": summarize(record, mode).to_dict(),
        },
    }


# ✅ [HISTORY] 특정 학생의 전체 학기 성적 (최신순)
@router.get("/student/{student_id}/history")
def get_student_grade_history(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        return {"success": False, "error": {"code": 404, "message": "Siswa tidak ditemukan"}}

    records = (
        db.query(StudentGradeModel)
        .filter(StudentGradeModel.student_id == student_id)
        .order_by(StudentGradeModel.academic_year.desc(), StudentGradeModel.semester.desc())
        .all()
    )
    return {
        "success": True,
        "data": [_grade_out(r, _mode_for(student, r.class_name)) for r in records],
        "message": "Belum ada riwayat nilai." if not records else "Riwayat nilai berhasil dimuat",
    }


# ==========================================================
# [4단계] 완전 동적 라우터
# ==========================================================

def _load(db: Session, grade_id: int):
    return db.query(StudentGradeModel).filter(StudentGradeModel.id == grade_id).first()


# ✅ [READ] 성적 상세 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    record = _load(db, grade_id)
    if record is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}
    student = db.query(StudentModel).filter(StudentModel.id == record.student_id).first()
    return {"success": True, "data": _grade_out(record, _mode_for(student, record.class_name))}


# ✅ [UPDATE] 점수만 수정
@router.put("/{grade_id}")
def update_grade(grade_id: int, updated: StudentGradeScores, db: Session = Depends(get_db)):
    record = _load(db, grade_id)
    if record is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}

    for key, value in updated.model_dump().items():
        setattr(record, key, value)

    db.commit()
    db.refresh(record)
    student = db.query(StudentModel).filter(StudentModel.id == record.student_id).first()
    return {
        "success": True,
        "data": _grade_out(record, _mode_for(student, record.class_name)),
        "message": "Grade updated successfully",
    }


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    record = _load(db, grade_id)
    if record is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}

    db.delete(record)
    db.commit()
    return {"success": True, "data": {"grade_id": grade_id, "message": "Grade deleted successfully"}}
