from typing import List, Optional
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.course import Course, Lesson, Quiz


class CourseRepository(BaseRepository[Course]):
    
    def __init__(self, db: Session):
        super().__init__(db, Course)
    
    def list_courses(self, skip: Optional[int] = None, limit: Optional[int] = None) -> List[Course]:
        query = self.db.query(Course).order_by(Course.created_at.desc(), Course.id)
        if skip is not None:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()
    
    def find_by_instructor(self, instructor_id: str) -> List[Course]:
        return self.find_by(instructor=instructor_id)


class LessonRepository(BaseRepository[Lesson]):
    
    def __init__(self, db: Session):
        super().__init__(db, Lesson)
    
    def find_by_course(self, course_id: str) -> List[Lesson]:
        return (
            self.db.query(Lesson)
            .filter(Lesson.course_id == course_id)
            .order_by(Lesson.order, Lesson.created_at)
            .all()
        )
    
    def lesson_ids_for_course(self, course_id: str) -> List[str]:
        rows = self.db.query(Lesson.id).filter(Lesson.course_id == course_id).all()
        return [str(row[0]) for row in rows]


class QuizRepository(BaseRepository[Quiz]):
    
    def __init__(self, db: Session):
        super().__init__(db, Quiz)
    
    def find_by_lesson(self, lesson_id: str) -> Optional[Quiz]:
        return self.find_one_by(lesson_id=lesson_id)
