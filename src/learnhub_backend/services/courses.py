import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import InternalServerException, NotFoundException
from learnhub_backend.interface.courses import CourseCreate, CourseGet, CourseUpdate
from learnhub_backend.interface.lessons import LessonCreate, LessonGet, LessonList, LessonUpdate
from learnhub_backend.model.course import Course, Lesson, Quiz, QuizQuestion
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.repositories.base import RepositoryError
from learnhub_backend.repositories.courses import CourseRepository, LessonRepository
from learnhub_backend.repositories.progress import ProgressRepository
from learnhub_backend.services.base import commit_or_raise
from learnhub_backend.services.enrollment import EnrollmentLedger

logger = logging.getLogger(__name__)


class CourseService:
    """Course and lesson lifecycle, including cascading course deletion."""

    def __init__(self, db: Session):
        self.db = db
        self.courses = CourseRepository(db)
        self.lessons = LessonRepository(db)
        self.progress = ProgressRepository(db)
        self.ledger = EnrollmentLedger(db)

    # Courses

    def list_courses(self, principal: Principal, skip: Optional[int] = None, limit: Optional[int] = None) -> List[CourseGet]:
        require(principal, Course, Action.LIST)

        return [CourseGet.model_validate(course) for course in self.courses.list_courses(skip, limit)]

    def get_course(self, principal: Principal, course_id: str) -> CourseGet:
        course = self._course_or_404(course_id)

        require(principal, Course, Action.GET, course)

        return CourseGet.model_validate(course)

    def list_taught_courses(self, principal: Principal) -> List[CourseGet]:
        require(principal, Course, Action.LIST_OWN)

        return [CourseGet.model_validate(course) for course in self.courses.find_by_instructor(principal.user_id)]

    def create_course(self, principal: Principal, data: CourseCreate) -> CourseGet:
        require(principal, Course, Action.CREATE)

        values = data.model_dump(exclude_none=True)
        course = Course(instructor=principal.user_id, **values)

        try:
            course = self.courses.create(course)
        except RepositoryError as e:
            logger.error(f"Creating course failed: {e}")
            raise InternalServerException("Server error while creating course")

        logger.info(f"Course {course.id} created by {principal.user_id}")

        return CourseGet.model_validate(course)

    def update_course(self, principal: Principal, course_id: str, data: CourseUpdate) -> CourseGet:
        course = self._course_or_404(course_id)

        require(principal, Course, Action.UPDATE, course)

        try:
            course = self.courses.update(course, data.model_dump(exclude_unset=True, exclude_none=True))
        except RepositoryError as e:
            logger.error(f"Updating course {course_id} failed: {e}")
            raise InternalServerException("Server error while updating course")

        return CourseGet.model_validate(course)

    def delete_course(self, principal: Principal, course_id: str):
        course = self._course_or_404(course_id)

        require(principal, Course, Action.DELETE, course)

        self._cascade_delete(course)

    def _cascade_delete(self, course: Course):
        """
        Remove a course and everything hanging off it, one committed step at a time:
        lessons (with their quizzes), progress rows, enrollment entries, the course.

        The steps are not one transaction. A failure part way leaves the
        earlier steps applied and is reported as an internal error.
        """
        course_id = str(course.id)
        step = "lessons"

        try:
            lesson_ids = self.lessons.lesson_ids_for_course(course_id)
            if lesson_ids:
                quiz_ids = [row[0] for row in self.db.query(Quiz.id).filter(Quiz.lesson_id.in_(lesson_ids)).all()]
                if quiz_ids:
                    self.db.query(QuizQuestion).filter(QuizQuestion.quiz_id.in_(quiz_ids)).delete(synchronize_session=False)
                    self.db.query(Quiz).filter(Quiz.id.in_(quiz_ids)).delete(synchronize_session=False)
                self.db.query(Lesson).filter(Lesson.course_id == course_id).delete(synchronize_session=False)
            self.db.commit()

            step = "progress records"
            removed_progress = self.progress.delete_for_course(course_id)
            self.db.commit()

            step = "enrollments"
            removed_enrollments = self.ledger.remove_course_everywhere(course_id)
            self.db.commit()

            step = "course"
            self.db.delete(course)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Deleting course {course_id} failed while removing {step}: {e}")
            raise InternalServerException(f"Course deletion failed while removing {step}")

        logger.info(
            f"Course {course_id} deleted with {len(lesson_ids)} lessons, "
            f"{removed_progress} progress records and {removed_enrollments} enrollments"
        )

    # Lessons

    def list_lessons(self, principal: Principal, course_id: str) -> List[LessonList]:
        course = self._course_or_404(course_id)

        require(principal, Lesson, Action.LIST, course)

        return [LessonList.model_validate(lesson) for lesson in self.lessons.find_by_course(str(course.id))]

    def get_lesson(self, principal: Principal, lesson_id: str) -> LessonGet:
        lesson = self._lesson_or_404(lesson_id)
        course = self.courses.get_by_id_optional(lesson.course_id)

        if course is None:
            logger.error(f"Lesson {lesson.id} references missing course {lesson.course_id}")
            raise InternalServerException("Course data for this lesson is missing.")

        context = self.ledger.authorization_context(principal)
        context["course"] = course

        require(principal, Lesson, Action.VIEW_CONTENT, lesson, context)

        return LessonGet.model_validate(lesson)

    def create_lesson(self, principal: Principal, course_id: str, data: LessonCreate) -> LessonGet:
        course = self._course_or_404(course_id)

        require(principal, Lesson, Action.CREATE, course)

        lesson = Lesson(course_id=str(course.id), instructor_id=principal.user_id, **data.model_dump())

        try:
            lesson = self.lessons.create(lesson)
        except RepositoryError as e:
            logger.error(f"Creating lesson in course {course_id} failed: {e}")
            raise InternalServerException("Server error while creating lesson")

        logger.info(f"Lesson {lesson.id} created in course {course.id} by {principal.user_id}")

        return LessonGet.model_validate(lesson)

    def update_lesson(self, principal: Principal, lesson_id: str, data: LessonUpdate) -> LessonGet:
        lesson = self._lesson_or_404(lesson_id)

        require(principal, Lesson, Action.UPDATE, lesson)

        try:
            lesson = self.lessons.update(lesson, data.model_dump(exclude_unset=True, exclude_none=True))
        except RepositoryError as e:
            logger.error(f"Updating lesson {lesson_id} failed: {e}")
            raise InternalServerException("Server error while updating lesson")

        return LessonGet.model_validate(lesson)

    def delete_lesson(self, principal: Principal, lesson_id: str):
        lesson = self._lesson_or_404(lesson_id)

        require(principal, Lesson, Action.DELETE, lesson)

        quiz = lesson.quiz
        if quiz is not None:
            self.db.delete(quiz)
            self.db.flush()
        self.progress.delete_for_lesson(str(lesson.id))
        self.db.delete(lesson)

        commit_or_raise(self.db, "delete the lesson")

        logger.info(f"Lesson {lesson_id} deleted by {principal.user_id}")

    def _course_or_404(self, course_id: str) -> Course:
        course = self.courses.get_by_id_optional(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        return course

    def _lesson_or_404(self, lesson_id: str) -> Lesson:
        lesson = self.lessons.get_by_id_optional(lesson_id)
        if lesson is None:
            raise NotFoundException("Lesson not found")
        return lesson
