from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.locations import Location as LocationModel
from models.students import Student as StudentModel
from models.teacher_reviews import SchoolTeacherReview as ReviewModel
from models.teachers import Teacher as TeacherModel
from schemas.locations import Location as LocationSchema, LocationCreate

router = APIRouter(prefix="/locations", tags=["지점/학교"])


# ✅ [CREATE] 지점 추가 (이름 중복 불가)
@router.post("/")
def create_location(location: LocationCreate, db: Session = Depends(get_db)):
    if db.query(LocationModel).filter(LocationModel.name == location.name).first():
        return {"success": False, "error": {"code": 409, "message": "Lokasi sudah ada"}}

    db_location = LocationModel(**location.model_dump())
    db.add(db_location)
    db.commit()
    db.refresh(db_location)
    return {"success": True, "data": LocationSchema.model_validate(db_location).model_dump()}


# ✅ [READ] 전체 지점 조회
@router.get("/")
def read_locations(db: Session = Depends(get_db)):
    records = db.query(LocationModel).order_by(LocationModel.name).all()
    return {"success": True, "data": [LocationSchema.model_validate(r).model_dump() for r in records]}


# ✅ [UPDATE] 지점 수정
@router.put("/{location_id}")
def update_location(location_id: int, updated: LocationCreate, db: Session = Depends(get_db)):
    location = db.query(LocationModel).filter(LocationModel.id == location_id).first()
    if location is None:
        return {"success": False, "error": {"code": 404, "message": "Lokasi tidak ditemukan"}}

    for key, value in updated.model_dump().items():
        setattr(location, key, value)

    db.commit()
    db.refresh(location)
    return {"success": True, "data": LocationSchema.model_validate(location).model_dump()}


# ✅ [DELETE] 지점 삭제
@router.delete("/{location_id}")
def delete_location(location_id: int, db: Session = Depends(get_db)):
    location = db.query(LocationModel).filter(LocationModel.id == location_id).first()
    if location is None:
        return {"success": False, "error": {"code": 404, "message": "Lokasi tidak ditemukan"}}

    # 학생/교사/평가가 참조 중이면 삭제 불가 (FK)
    in_use = (
        db.query(StudentModel).filter(StudentModel.location_id == location_id).first()
        or db.query(TeacherModel).filter(TeacherModel.location_id == location_id).first()
        or db.query(ReviewModel).filter(ReviewModel.school_id == location_id).first()
    )
    if in_use:
        return {"success": False, "error": {"code": 409, "message": "Lokasi masih digunakan"}}

    db.delete(location)
    db.commit()
    return {"success": True, "data": {"location_id": location_id}}
