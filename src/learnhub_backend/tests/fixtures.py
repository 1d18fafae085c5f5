"""
Test fixtures for the test suite.

SQLite in-memory sessions, entity factories and an HTTP client wired to the
test session.
"""

import pytest
from typing import Generator, List, Optional
from uuid import uuid4
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from learnhub_backend.auth.security import create_access_token, hash_password
from learnhub_backend.database import get_db
from learnhub_backend.model import Base
from learnhub_backend.model.auth import User, UserEnrolledCourse
from learnhub_backend.model.course import Course, Lesson, Quiz, QuizQuestion
from learnhub_backend.permissions.principal import Principal


# Test database setup
@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """Create a test database session using SQLite in-memory."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    from learnhub_backend.server import app

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# Factories

def make_user(db: Session, role: str = "student", name: Optional[str] = None, password: str = "secret123") -> User:
    user = User(
        name=name or f"{role} {uuid4().hex[:6]}",
        email=f"{uuid4().hex[:10]}@example.com",
        password=hash_password(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_course(db: Session, instructor: User, title: str = "Intro to Python") -> Course:
    course = Course(
        title=title,
        description="Learn the basics",
        instructor=instructor.id,
        price=10,
        category="Programming",
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def make_lesson(db: Session, course: Course, instructor: Optional[User] = None, order: int = 0) -> Lesson:
    lesson = Lesson(
        course_id=course.id,
        instructor_id=instructor.id if instructor is not None else course.instructor,
        title=f"Lesson {order}",
        description="A lesson",
        content="Secret lesson content",
        order=order,
    )
    db.add(lesson)
    db.commit()
    db.refresh(lesson)
    return lesson


def make_quiz(db: Session, lesson: Lesson, answers: List[str] = ("A", "B")) -> Quiz:
    quiz = Quiz(
        lesson_id=lesson.id,
        title="Checkpoint",
        questions=[
            QuizQuestion(
                position=position,
                question_text=f"Question {position + 1}",
                options=["A", "B", "C"],
                correct_answer=answer,
            )
            for position, answer in enumerate(answers)
        ],
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz


def enroll(db: Session, user: User, course: Course):
    db.add(UserEnrolledCourse(user_id=user.id, course_id=course.id))
    db.commit()


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, role=user.role)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}
