from typing import List, Optional, Set
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.auth import User, UserEnrolledCourse
from ..model.course import Course


class UserRepository(BaseRepository[User]):
    """Identity store: user records and their enrollment sets."""
    
    def __init__(self, db: Session):
        super().__init__(db, User)
    
    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by(email=email.lower())
    
    def enrolled_course_ids(self, user_id: str) -> Set[str]:
        rows = (
            self.db.query(UserEnrolledCourse.course_id)
            .filter(UserEnrolledCourse.user_id == user_id)
            .all()
        )
        return {str(row[0]) for row in rows}
    
    def enrolled_courses(self, user_id: str) -> List[Course]:
        """Courses of the enrollment set, in enrollment order."""
        return (
            self.db.query(Course)
            .join(UserEnrolledCourse, UserEnrolledCourse.course_id == Course.id)
            .filter(UserEnrolledCourse.user_id == user_id)
            .order_by(UserEnrolledCourse.id)
            .all()
        )
