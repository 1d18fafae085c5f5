from typing import Any, Dict, List
from sqlalchemy.orm import Session

from .base import BaseRepository, RepositoryError
from ..model.base import generate_id
from ..model.progress import UserProgress

PROGRESS_KEY = ["user_id", "lesson_id"]


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RepositoryError(f"Atomic upsert is not supported on dialect '{dialect}'")

    return insert


class ProgressRepository(BaseRepository[UserProgress]):
    """Progress rows, unique per (user, lesson)."""
    
    def __init__(self, db: Session):
        super().__init__(db, UserProgress)
    
    def upsert(self, user_id: str, lesson_id: str, course_id: str, values: Dict[str, Any]) -> UserProgress:
        """
        Insert or update the row for (user_id, lesson_id) in one statement.
        
        Conflicts on the unique key are resolved by the database, so two
        concurrent writers never produce two rows; the later write wins.
        """
        insert = _dialect_insert(self.db)

        stmt = insert(UserProgress).values(
            id=generate_id(),
            user_id=user_id,
            lesson_id=lesson_id,
            course_id=course_id,
            **values
        )

        updated_columns = ["course_id", *values.keys()]
        stmt = stmt.on_conflict_do_update(
            index_elements=PROGRESS_KEY,
            set_={column: getattr(stmt.excluded, column) for column in updated_columns}
        )

        self.db.execute(stmt)
        self.db.commit()

        return (
            self.db.query(UserProgress)
            .filter(UserProgress.user_id == user_id, UserProgress.lesson_id == lesson_id)
            .one()
        )
    
    def find_for_lessons(self, user_id: str, lesson_ids: List[str]) -> List[UserProgress]:
        if len(lesson_ids) == 0:
            return []
        return (
            self.db.query(UserProgress)
            .filter(UserProgress.user_id == user_id, UserProgress.lesson_id.in_(lesson_ids))
            .all()
        )
    
    def delete_for_course(self, course_id: str) -> int:
        return self.db.query(UserProgress).filter(UserProgress.course_id == course_id).delete(synchronize_session=False)
    
    def delete_for_lesson(self, lesson_id: str) -> int:
        return self.db.query(UserProgress).filter(UserProgress.lesson_id == lesson_id).delete(synchronize_session=False)
