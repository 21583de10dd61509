import os

# 설정/엔진은 import 시점에 만들어지므로 앱 import 전에 테스트 DB 지정
os.environ["DB_URL_OVERRIDE"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, engine
from main import app
from models.locations import Location
from models.students import Student
from models.teachers import Teacher


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def school(db):
    location = Location(name="SMP Tarakanita", address="Jakarta")
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


@pytest.fixture
def students(db, school):
    regular = Student(name="Andi", school_name=school.name, class_name="7A",
                      class_type="REGULAR", location_id=school.id)
    bilingual = Student(name="Budi", school_name=school.name, class_name="7 Bilingual",
                        class_type="BILINGUAL", location_id=school.id)
    db.add_all([regular, bilingual])
    db.commit()
    db.refresh(regular)
    db.refresh(bilingual)
    return regular, bilingual


@pytest.fixture
def teachers(db, school):
    rows = [Teacher(name="Ms. Hila", email="hila@example.com", location_id=school.id),
            Teacher(name="Mr. Mo", email="mo@example.com", location_id=school.id)]
    db.add_all(rows)
    db.commit()
    for t in rows:
        db.refresh(t)
    return rows
