import logging
from typing import Any, Dict, List, Set
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import ConflictException, InternalServerException, NotFoundException
from learnhub_backend.interface.courses import CourseGet
from learnhub_backend.interface.enrollments import EnrollmentCheck, EnrollmentResult
from learnhub_backend.model.auth import UserEnrolledCourse
from learnhub_backend.model.course import Course
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.repositories.courses import CourseRepository
from learnhub_backend.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class EnrollmentLedger:
    """
    Which users are enrolled in which courses.

    The user's enrollment set (user_enrolled_course rows) is the single source
    of truth. `enroll` refuses duplicates, `unenroll` silently ignores pairs
    that were never enrolled.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.courses = CourseRepository(db)

    def is_enrolled(self, user_id: str, course_id: str) -> bool:
        return (
            self.db.query(UserEnrolledCourse.id)
            .filter(UserEnrolledCourse.user_id == user_id, UserEnrolledCourse.course_id == course_id)
            .first()
        ) is not None

    def enrolled_course_ids(self, user_id: str) -> Set[str]:
        return self.users.enrolled_course_ids(user_id)

    def list_enrolled(self, user_id: str) -> List[Course]:
        return self.users.enrolled_courses(user_id)

    def authorization_context(self, principal: Principal) -> Dict[str, Any]:
        """Enrollment facts the permission handlers decide on."""
        if not principal.is_authenticated:
            return {"enrolled_course_ids": set()}
        return {"enrolled_course_ids": self.enrolled_course_ids(principal.user_id)}

    def enroll(self, principal: Principal, user_id: str, course_id: str) -> EnrollmentResult:
        self._resolve(user_id, course_id)

        require(principal, UserEnrolledCourse, Action.ENROLL, context={"user_id": user_id})

        if self.is_enrolled(user_id, course_id):
            raise ConflictException("User is already enrolled in this course")

        try:
            self.db.add(UserEnrolledCourse(user_id=user_id, course_id=course_id))
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent enroll for the same pair
            self.db.rollback()
            raise ConflictException("User is already enrolled in this course")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Enrolling user {user_id} in course {course_id} failed: {e}")
            raise InternalServerException("Server error during enrollment")

        logger.info(f"User {user_id} enrolled in course {course_id}")

        return self._result("Successfully enrolled in course", user_id, course_id)

    def unenroll(self, principal: Principal, user_id: str, course_id: str) -> EnrollmentResult:
        self._resolve(user_id, course_id)

        require(principal, UserEnrolledCourse, Action.UNENROLL, context={"user_id": user_id})

        try:
            removed = (
                self.db.query(UserEnrolledCourse)
                .filter(UserEnrolledCourse.user_id == user_id, UserEnrolledCourse.course_id == course_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Unenrolling user {user_id} from course {course_id} failed: {e}")
            raise InternalServerException("Server error during unenrollment")

        if removed:
            logger.info(f"User {user_id} unenrolled from course {course_id}")

        return self._result("Successfully unenrolled from course", user_id, course_id)

    def check_enrollment(self, principal: Principal, user_id: str, course_id: str) -> EnrollmentCheck:
        if self.users.get_by_id_optional(user_id) is None:
            raise NotFoundException("User not found")

        require(principal, UserEnrolledCourse, Action.CHECK, context={"user_id": user_id})

        return EnrollmentCheck(is_enrolled=self.is_enrolled(user_id, course_id))

    def my_courses(self, principal: Principal) -> List[CourseGet]:
        require(principal, UserEnrolledCourse, Action.LIST_OWN)

        return [CourseGet.model_validate(course) for course in self.list_enrolled(principal.user_id)]

    def remove_course_everywhere(self, course_id: str) -> int:
        """Drop a course from every enrollment set. The caller commits."""
        return (
            self.db.query(UserEnrolledCourse)
            .filter(UserEnrolledCourse.course_id == course_id)
            .delete(synchronize_session=False)
        )

    def _resolve(self, user_id: str, course_id: str):
        if self.users.get_by_id_optional(user_id) is None:
            raise NotFoundException("User not found")
        if self.courses.get_by_id_optional(course_id) is None:
            raise NotFoundException("Course not found")

    def _result(self, message: str, user_id: str, course_id: str) -> EnrollmentResult:
        return EnrollmentResult(
            message=message,
            user_id=user_id,
            course_id=course_id,
            enrolled_courses=[str(course.id) for course in self.list_enrolled(user_id)],
        )
