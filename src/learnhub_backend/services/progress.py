import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import InternalServerException, NotFoundException
from learnhub_backend.interface.progress import CourseProgress, UserProgressGet
from learnhub_backend.model.progress import UserProgress
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.repositories.base import RepositoryError
from learnhub_backend.repositories.courses import CourseRepository, LessonRepository
from learnhub_backend.repositories.progress import ProgressRepository
from learnhub_backend.services.enrollment import EnrollmentLedger

logger = logging.getLogger(__name__)


def completion_percentage(completed: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(completed / total * 100, 2)


class ProgressTracker:
    """
    Per (user, lesson) progress records.

    Every write goes through a single upsert keyed on (user_id, lesson_id),
    so there is never more than one row per pair. Completion is recorded
    without checking enrollment.
    """

    def __init__(self, db: Session):
        self.db = db
        self.progress = ProgressRepository(db)
        self.courses = CourseRepository(db)
        self.lessons = LessonRepository(db)
        self.ledger = EnrollmentLedger(db)

    def mark_complete(self, principal: Principal, lesson_id: str) -> UserProgressGet:
        lesson = self.lessons.get_by_id_optional(lesson_id)

        if lesson is None:
            raise NotFoundException("Lesson not found")

        require(principal, UserProgress, Action.COMPLETE)

        progress = self._upsert(
            principal.user_id,
            str(lesson.id),
            str(lesson.course_id),
            {"completed": True, "completion_date": datetime.now(timezone.utc)},
        )

        logger.info(f"User {principal.user_id} completed lesson {lesson.id}")

        return UserProgressGet.model_validate(progress)

    def record_quiz_result(
        self,
        user_id: str,
        lesson_id: str,
        course_id: str,
        score: Optional[float] = None,
        completed: bool = True,
    ) -> UserProgress:
        """Record a quiz attempt for the lesson. A later attempt overwrites the score."""
        values = {
            "completed": completed,
            "quiz_attempted": True,
        }
        if completed:
            values["completion_date"] = datetime.now(timezone.utc)
        if score is not None:
            values["quiz_score"] = score

        return self._upsert(user_id, lesson_id, course_id, values)

    def get_course_progress(self, principal: Principal, course_id: str) -> CourseProgress:
        course = self.courses.get_by_id_optional(course_id)

        if course is None:
            raise NotFoundException("Course not found")

        require(
            principal,
            UserProgress,
            Action.VIEW_PROGRESS,
            course,
            self.ledger.authorization_context(principal),
        )

        lesson_ids = self.lessons.lesson_ids_for_course(str(course.id))
        rows = self.progress.find_for_lessons(principal.user_id, lesson_ids)

        progress = {str(row.lesson_id): bool(row.completed) for row in rows}
        completed = sum(1 for done in progress.values() if done)

        return CourseProgress(
            course_id=str(course.id),
            total_lessons=len(lesson_ids),
            completed_lessons=completed,
            progress=progress,
            percentage=completion_percentage(completed, len(lesson_ids)),
        )

    def _upsert(self, user_id: str, lesson_id: str, course_id: str, values: Dict[str, Any]) -> UserProgress:
        try:
            return self.progress.upsert(user_id, lesson_id, course_id, values)
        except (RepositoryError, SQLAlchemyError) as e:
            self.db.rollback()
            logger.error(f"Recording progress of user {user_id} on lesson {lesson_id} failed: {e}")
            raise InternalServerException("Server error while updating progress")
