"""Shared fixtures: in-memory database, API client and token helpers."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import SecurityUtils
from app.main import app as application
from app.models import QuizQuestion, Student, StudentQuizProgress, StudentRole


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """TestClient wired to the in-memory database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    yield TestClient(application, raise_server_exceptions=False)
    application.dependency_overrides.clear()


def auth_headers(student_id=None, **claims):
    data = dict(claims)
    if student_id is not None:
        data["sub"] = student_id
    token = SecurityUtils.create_access_token(data)
    return {"Authorization": f"Bearer {token}"}


def make_student(db, name="Student", email=None, role=StudentRole.STUDENT):
    student = Student(name=name, email=email, role=role)
    db.add(student)
    db.commit()
    return student


def make_questions(db, date, level, count):
    questions = [
        QuizQuestion(date=date, level=level, question=f"Question {i}", options=["a", "b"], correct_answer="a")
        for i in range(count)
    ]
    db.add_all(questions)
    db.commit()
    return questions


def make_progress(db, student_id, date, level, total, completed=False):
    progress = StudentQuizProgress(
        student_id=student_id, date=date, level=level, total_diamonds=total, completed=completed
    )
    db.add(progress)
    db.commit()
    return progress
