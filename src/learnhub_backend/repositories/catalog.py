from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.job import Job
from ..model.storybook import Storybook


class JobRepository(BaseRepository[Job]):
    
    def __init__(self, db: Session):
        super().__init__(db, Job)
    
    def search(
        self,
        keyword: Optional[str] = None,
        job_type: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Job], int]:
        """Newest postings first. Returns the page and the total match count."""
        query = self.db.query(Job)
        
        if keyword:
            pattern = f"%{keyword.strip()}%"
            query = query.filter(or_(
                Job.title.ilike(pattern),
                Job.company.ilike(pattern),
                Job.location.ilike(pattern),
                Job.description.ilike(pattern),
            ))
        
        if job_type:
            query = query.filter(Job.job_type == job_type)
        
        total = query.count()
        jobs = query.order_by(Job.posted_at.desc(), Job.id).offset(skip).limit(limit).all()
        
        return jobs, total
    
    def find_by_poster(self, user_id: str) -> List[Job]:
        return (
            self.db.query(Job)
            .filter(Job.posted_by == user_id)
            .order_by(Job.posted_at.desc(), Job.id)
            .all()
        )


class StorybookRepository(BaseRepository[Storybook]):
    
    def __init__(self, db: Session):
        super().__init__(db, Storybook)
    
    def list_newest(self) -> List[Storybook]:
        return self.db.query(Storybook).order_by(Storybook.created_at.desc(), Storybook.id).all()
