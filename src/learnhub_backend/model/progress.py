from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float,
    ForeignKey, Index, String, false
)

from .base import Base, generate_id


class UserProgress(Base):
    __tablename__ = 'user_progress'
    __table_args__ = (
        Index('user_progress_user_lesson_key', 'user_id', 'lesson_id', unique=True),
        CheckConstraint('quiz_score IS NULL OR (quiz_score >= 0 AND quiz_score <= 100)', name='user_progress_quiz_score_check'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = Column(String(36), nullable=False, index=True)
    lesson_id = Column(String(36), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())
    completion_date = Column(DateTime(True))
    quiz_score = Column(Float)
    quiz_attempted = Column(Boolean, nullable=False, default=False, server_default=false())
