import os
import tempfile

# ✅ 앱/DB 모듈 import 전에 테스트용 설정 주입 (임시 sqlite 파일)
_DB_DIR = tempfile.mkdtemp(prefix="student-risk-tests-")
os.environ["DATABASE_URL_OVERRIDE"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ADMIN_API_TOKEN"] = "admin-token"
os.environ["TEACHER_API_TOKEN"] = "teacher-token"
os.environ["HOD_API_TOKEN"] = "hod-token"
os.environ["BACKLOG_POLICY"] = "latest"

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, engine
from main import app
from schemas.students import StudentCreate
from services.student_service import register_student

ADMIN = {"Authorization": "Bearer admin-token"}
TEACHER = {"Authorization": "Bearer teacher-token"}
HOD = {"Authorization": "Bearer hod-token"}


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_student_data(**overrides) -> StudentCreate:
    data = {
        "name": "Asha Verma",
        "email": "Asha.Verma@college.edu",
        "roll_no": "CSE21-014",
        "department": "CSE",
        "program": "B.Tech",
        "batch": "2021",
        "semester": 3,
        "section": "A",
    }
    data.update(overrides)
    return StudentCreate(**data)


@pytest.fixture
def student_data():
    return make_student_data


@pytest.fixture
def auth():
    return {"admin": ADMIN, "teacher": TEACHER, "hod": HOD}


@pytest.fixture
def student_id(db):
    student = register_student(db, make_student_data())
    return student.id
