from .base import Base, metadata
from .auth import User, UserEnrolledCourse, USER_ROLES
from .course import Course, Lesson, Quiz, QuizQuestion, COURSE_CATEGORIES
from .progress import UserProgress
from .job import Job, SALARY_RANGES, JOB_TYPES
from .storybook import Storybook

# Import all models to ensure relationships are properly set up
from . import auth, course, progress, job, storybook

__all__ = [
    'Base',
    'metadata',
    # Identity
    'User',
    'UserEnrolledCourse',
    'USER_ROLES',
    # Course models
    'Course',
    'Lesson',
    'Quiz',
    'QuizQuestion',
    'COURSE_CATEGORIES',
    # Progress
    'UserProgress',
    # Catalog
    'Job',
    'SALARY_RANGES',
    'JOB_TYPES',
    'Storybook',
]
