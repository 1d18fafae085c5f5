from sqlalchemy import (
    CheckConstraint, Column, DateTime, Float, ForeignKey,
    Integer, JSON, String, Text, func
)
from sqlalchemy.orm import relationship

from .base import Base, generate_id

COURSE_CATEGORIES = (
    'Web Development',
    'Web Design',
    'Backend Development',
    'Programming',
    'Design',
    'Computer Science',
    'Data Science',
    'Mobile Development',
)


class Course(Base):
    __tablename__ = 'course'
    __table_args__ = (
        CheckConstraint('price >= 0', name='course_price_check'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    # Owning user id. Opaque, deliberately not a foreign key.
    instructor = Column(String(255), nullable=False, index=True)
    price = Column(Float, nullable=False, default=0)
    image_url = Column(String(2048), default='https://via.placeholder.com/400x250')
    category = Column(String(64), nullable=False)
    rating_average = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)


class Lesson(Base):
    __tablename__ = 'lesson'
    __table_args__ = (
        CheckConstraint('"order" >= 0', name='lesson_order_check'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    course_id = Column(ForeignKey('course.id', ondelete='CASCADE'), nullable=False, index=True)
    instructor_id = Column(String(36), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    video_url = Column(String(2048))
    image_url = Column(String(2048))
    content = Column(String(5000))
    external_url = Column(String(2048))
    order = Column(Integer, nullable=False, default=0)

    # Relationships
    quiz = relationship('Quiz', uselist=False, viewonly=True)

    @property
    def quiz_id(self):
        return self.quiz.id if self.quiz is not None else None


class Quiz(Base):
    __tablename__ = 'quiz'

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    lesson_id = Column(ForeignKey('lesson.id', ondelete='CASCADE'), nullable=False, unique=True)
    title = Column(String(100), nullable=False)
    description = Column(Text)

    # Relationships
    questions = relationship(
        'QuizQuestion',
        back_populates='quiz',
        order_by='QuizQuestion.position',
        cascade='all, delete-orphan',
    )


class QuizQuestion(Base):
    __tablename__ = 'quiz_question'

    id = Column(String(36), primary_key=True, default=generate_id)
    quiz_id = Column(ForeignKey('quiz.id', ondelete='CASCADE'), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    question_text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)
    correct_answer = Column(Text, nullable=False)

    # Relationships
    quiz = relationship('Quiz', back_populates='questions')
