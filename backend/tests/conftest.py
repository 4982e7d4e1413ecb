import os
from datetime import date

import pytest

# keep the app import off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from student_records import models
from student_records.database import get_session
from student_records.main import app
from student_records.repositories import StudentRepository
from student_records.services import StudentService


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database per test."""
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def repo(session):
    return StudentRepository(session)


@pytest.fixture()
def service(repo):
    return StudentService(repo)


@pytest.fixture()
def client(engine):
    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_student(**overrides) -> models.Student:
    fields = dict(
        student_name="Asha",
        address=models.Address(pincode="560001", state="Karnataka", city="Bengaluru"),
        age=20,
        email="asha@school.in",
        mobile="9876543210",
        gender=models.Gender.FEMALE,
        dob=date(2005, 4, 12),
    )
    fields.update(overrides)
    return models.Student(**fields)


def student_payload(**overrides) -> dict:
    payload = {
        "studentName": "Ravi",
        "address": {"pincode": "400001", "state": "Maharashtra", "city": "Mumbai"},
        "age": 19,
        "email": "ravi@school.in",
        "mobile": "8123456789",
        "gender": "MALE",
        "dob": "2006-01-30",
    }
    payload.update(overrides)
    return payload
