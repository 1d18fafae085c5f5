"""
Repository pattern implementation for direct database access.

Explicit lookups (users, courses, lessons, quizzes, progress, jobs, storybooks) used by the
services instead of ORM relationship loading.
"""

from .base import (
    BaseRepository,
    RepositoryError,
    DuplicateError
)
from .users import UserRepository
from .courses import CourseRepository, LessonRepository, QuizRepository
from .progress import ProgressRepository
from .catalog import JobRepository, StorybookRepository

__all__ = [
    "BaseRepository",
    "RepositoryError", 
    "DuplicateError",
    "UserRepository",
    "CourseRepository",
    "LessonRepository",
    "QuizRepository",
    "ProgressRepository",
    "JobRepository",
    "StorybookRepository",
]
