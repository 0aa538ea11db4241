import os
import tempfile
from datetime import date

_tmp = tempfile.mkdtemp(prefix="smartgen-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp}/test.db"
os.environ["LOG_DIR"] = os.path.join(_tmp, "logs")
os.environ["IMGBB_API_KEY"] = "test-key"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.admin import Admin
from app.models.payment import Payment
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.utils.auth import create_access_token
from app.utils.hashing import pwd_context


@pytest.fixture(autouse=True)
def _fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def auth_headers(profile, role):
    return {"Authorization": f"Bearer {create_access_token(profile.id, role)}"}


@pytest.fixture
def make_teacher(db):
    def _make(**overrides):
        data = dict(
            full_name="Jean Mbarga",
            user="jmbarga",
            email="jean@example.com",
            password=pwd_context.hash("secret123"),
            contact="+237659821731",
            town="Yaoundé",
            gender="male",
            category="franco",
            subjects=["Mathématiques", "Physique"],
            location=["Bastos", "Mvan"],
            available_days=["Lundi", "Mercredi"],
            years_experience=5,
            highest_diploma="Master",
            is_approved=True,
            success_rate=80,
        )
        data.update(overrides)
        teacher = Teacher(**data)
        db.add(teacher)
        db.commit()
        db.refresh(teacher)
        return teacher
    return _make


@pytest.fixture
def make_admin(db):
    def _make(**overrides):
        data = dict(
            full_name="Awa Ngono",
            role="promoteur",
            email="awa@example.com",
            user="awa",
            password=pwd_context.hash("adminpass"),
        )
        data.update(overrides)
        admin = Admin(**data)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin
    return _make


@pytest.fixture
def make_student(db):
    def _make(teachers=(), amount=15000, **overrides):
        data = dict(
            identifier="ST00F1",
            user="ST00F1",
            full_name="Paul Essomba",
            guardian_name="Marie Essomba",
            guardian_phone="677000111",
            class_name="Form 3",
            quarter="Bastos",
            days_per_week=3,
            categories="franco",
        )
        data.update(overrides)
        student = Student(**data)
        db.add(student)
        db.flush()
        for t in teachers:
            db.add(StudentTeacherRelation(student_id=student.id, teacher_id=t.id))
            db.add(Payment(
                student_id=student.id,
                teacher_id=t.id,
                amount=amount,
                payment_date=date(2025, 1, 10),
                next_payment_due=date(2025, 2, 10),
                status="pending",
            ))
        db.commit()
        db.refresh(student)
        return student
    return _make


@pytest.fixture
def admin(make_admin):
    return make_admin()


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin, "admin")


@pytest.fixture
def headers_for():
    return auth_headers
