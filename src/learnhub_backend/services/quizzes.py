import logging
from typing import Tuple, Union
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import ConflictException, InternalServerException, NotFoundException
from learnhub_backend.interface.quizzes import QuizCreate, QuizGet, QuizStudentGet, QuizUpdate
from learnhub_backend.model.course import Course, Lesson, Quiz, QuizQuestion
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal, Role
from learnhub_backend.repositories.base import DuplicateError, RepositoryError
from learnhub_backend.repositories.courses import CourseRepository, LessonRepository, QuizRepository
from learnhub_backend.services.base import commit_or_raise
from learnhub_backend.services.enrollment import EnrollmentLedger

logger = logging.getLogger(__name__)


def build_questions(questions) -> list[QuizQuestion]:
    return [
        QuizQuestion(
            position=position,
            question_text=question.question_text,
            options=list(question.options),
            correct_answer=question.correct_answer,
        )
        for position, question in enumerate(questions)
    ]


def strip_answers(quiz: Quiz) -> QuizStudentGet:
    """The quiz as a student sees it before submitting."""
    return QuizStudentGet.model_validate(quiz)


class QuizService:

    def __init__(self, db: Session):
        self.db = db
        self.quizzes = QuizRepository(db)
        self.lessons = LessonRepository(db)
        self.courses = CourseRepository(db)
        self.ledger = EnrollmentLedger(db)

    def resolve(self, quiz_id: str) -> Tuple[Quiz, Lesson, Course]:
        """
        Fetch a quiz together with its lesson and course.

        A quiz whose lesson or course row is gone is a data integrity
        failure, not a missing resource.
        """
        quiz = self.quizzes.get_by_id_optional(quiz_id)

        if quiz is None:
            raise NotFoundException("Quiz not found")

        lesson = self.lessons.get_by_id_optional(quiz.lesson_id)

        if lesson is None:
            logger.error(f"Quiz {quiz.id} references missing lesson {quiz.lesson_id}")
            raise InternalServerException("Associated lesson for this quiz not found. The lesson reference is broken.")

        course = self.courses.get_by_id_optional(lesson.course_id)

        if course is None:
            logger.error(f"Lesson {lesson.id} of quiz {quiz.id} references missing course {lesson.course_id}")
            raise InternalServerException("Course data for the associated lesson is missing.")

        return quiz, lesson, course

    def get_quiz(self, principal: Principal, quiz_id: str) -> Union[QuizGet, QuizStudentGet]:
        quiz, lesson, _ = self.resolve(quiz_id)

        require(principal, Quiz, Action.VIEW_CONTENT, lesson, self.ledger.authorization_context(principal))

        if principal.has_role(Role.STUDENT) and not principal.is_owner(lesson.instructor_id):
            return strip_answers(quiz)

        return QuizGet.model_validate(quiz)

    def create_quiz(self, principal: Principal, data: QuizCreate) -> QuizGet:
        lesson = self.lessons.get_by_id_optional(data.lesson_id)

        if lesson is None:
            raise NotFoundException("Lesson not found")

        require(principal, Quiz, Action.CREATE, lesson)

        if self.quizzes.find_by_lesson(str(lesson.id)) is not None:
            raise ConflictException("A quiz already exists for this lesson. Please edit the existing one.")

        quiz = Quiz(
            lesson_id=str(lesson.id),
            title=data.title,
            description=data.description,
            questions=build_questions(data.questions),
        )

        try:
            quiz = self.quizzes.create(quiz, {"lesson_id": str(lesson.id)})
        except DuplicateError:
            raise ConflictException("A quiz already exists for this lesson. Please edit the existing one.")
        except RepositoryError as e:
            logger.error(f"Creating quiz for lesson {lesson.id} failed: {e}")
            raise InternalServerException("Server error while creating quiz")

        logger.info(f"Quiz {quiz.id} created for lesson {lesson.id} by {principal.user_id}")

        return QuizGet.model_validate(quiz)

    def update_quiz(self, principal: Principal, quiz_id: str, data: QuizUpdate) -> QuizGet:
        quiz, lesson, _ = self.resolve(quiz_id)

        require(principal, Quiz, Action.UPDATE, lesson)

        updates = data.model_dump(exclude_unset=True, exclude={"questions"})
        for key, value in updates.items():
            setattr(quiz, key, value)

        if data.questions is not None:
            quiz.questions = build_questions(data.questions)

        commit_or_raise(self.db, "update the quiz")
        self.db.refresh(quiz)

        return QuizGet.model_validate(quiz)

    def delete_quiz(self, principal: Principal, quiz_id: str):
        quiz, lesson, _ = self.resolve(quiz_id)

        require(principal, Quiz, Action.DELETE, lesson)

        self.db.delete(quiz)
        commit_or_raise(self.db, "delete the quiz")

        logger.info(f"Quiz {quiz_id} deleted by {principal.user_id}")
