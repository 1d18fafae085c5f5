from .identity import IdentityService
from .enrollment import EnrollmentLedger
from .progress import ProgressTracker, completion_percentage
from .quizzes import QuizService, strip_answers
from .grading import QuizGradingEngine, grade
from .courses import CourseService
from .catalog import JobService, StorybookService

__all__ = [
    'IdentityService',
    'EnrollmentLedger',
    'ProgressTracker',
    'completion_percentage',
    'QuizService',
    'strip_answers',
    'QuizGradingEngine',
    'grade',
    'CourseService',
    'JobService',
    'StorybookService',
]
