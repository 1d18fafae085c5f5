from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey,
    Index, Integer, String, func
)
from sqlalchemy.orm import relationship

from .base import Base, generate_id

USER_ROLES = ("student", "instructor", "admin")


class User(Base):
    __tablename__ = 'user'
    __table_args__ = (
        CheckConstraint("role IN ('student', 'instructor', 'admin')", name='user_role_check'),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    password = Column(String(1024), nullable=False)
    role = Column(String(32), nullable=False, default="student")
    phone = Column(String(64))
    bio = Column(String(500))
    profile_image = Column(String(2048), default="https://placehold.co/100x100?text=User")

    # Relationships
    enrollments = relationship(
        'UserEnrolledCourse',
        back_populates='user',
        order_by='UserEnrolledCourse.id',
        cascade='all, delete-orphan',
    )

    @property
    def enrolled_course_ids(self) -> list[str]:
        return [enrollment.course_id for enrollment in self.enrollments]


class UserEnrolledCourse(Base):
    """The enrollment set of a user. Row order is enrollment order."""
    __tablename__ = 'user_enrolled_course'
    __table_args__ = (
        Index('user_enrolled_course_key', 'user_id', 'course_id', unique=True),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = Column(ForeignKey('course.id', ondelete='CASCADE'), nullable=False, index=True)

    # Relationships
    user = relationship('User', back_populates='enrollments')
    course = relationship('Course')
