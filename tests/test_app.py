from fastapi import FastAPI
from fastapi.testclient import TestClient

from middlewares.error_handler import add_error_handlers


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert "X-Latency-Ms" in res.headers


def test_student_crud_exposes_mode(client, school):
    body = client.post("/v1/students/", json={
        "name": "Citra", "school_name": school.name, "class_name": "Kelas 9 Bilingual",
    }).json()
    assert body["data"]["class_type"] == "REGULAR"
    assert body["data"]["mode"] == "bilingual"

    student_id = body["data"]["id"]
    assert client.get(f"/v1/students/{student_id}").json()["data"]["name"] == "Citra"
    assert client.get("/v1/students/search", params={"name": "Cit"}).json()["success"] is True
    assert client.delete(f"/v1/students/{student_id}").json()["success"] is True
    assert client.get(f"/v1/students/{student_id}").json()["error"]["code"] == 404


def test_location_names_unique(client):
    assert client.post("/v1/locations/", json={"name": "Bintaro"}).json()["success"] is True
    body = client.post("/v1/locations/", json={"name": "Bintaro"}).json()
    assert body["error"]["code"] == 409


def test_teacher_crud(client, school):
    body = client.post("/v1/teachers/", json={"name": "Mr. Edward", "location_id": school.id}).json()
    teacher_id = body["data"]["id"]
    listed = client.get("/v1/teachers/", params={"location_id": school.id}).json()["data"]
    assert [t["id"] for t in listed] == [teacher_id]
    assert client.put(f"/v1/teachers/{teacher_id}", json={"name": "Mr. Ed"}).json()["data"]["name"] == "Mr. Ed"


def test_student_with_grades_cannot_be_deleted(client, students):
    regular, _ = students
    client.post("/v1/student_grades/", json={
        "student_id": regular.id, "academic_year": "2024/2025", "semester": "1",
        "school_name": regular.school_name, "class_name": regular.class_name, "mid": 70,
    })

    body = client.delete(f"/v1/students/{regular.id}").json()
    assert body["success"] is False
    assert body["error"]["code"] == 409
    assert client.get(f"/v1/students/{regular.id}").json()["success"] is True


def test_location_in_use_cannot_be_deleted(client, school, students):
    body = client.delete(f"/v1/locations/{school.id}").json()
    assert body["error"]["code"] == 409

    empty_id = client.post("/v1/locations/", json={"name": "Serpong"}).json()["data"]["id"]
    assert client.delete(f"/v1/locations/{empty_id}").json()["success"] is True


def test_unhandled_error_uses_error_response():
    broken = FastAPI()
    add_error_handlers(broken)

    @broken.get("/boom")
    def boom():
        raise RuntimeError("database unavailable")

    res = TestClient(broken, raise_server_exceptions=False).get("/boom")
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == {"code": "INTERNAL_ERROR", "message": "database unavailable"}
    assert "generated_at" in body
