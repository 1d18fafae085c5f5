from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class UserProgressGet(BaseModel):
    id: str
    user_id: str
    course_id: str
    lesson_id: str
    completed: bool
    completion_date: Optional[datetime] = None
    quiz_score: Optional[float] = None
    quiz_attempted: bool = False

    model_config = ConfigDict(from_attributes=True)

class CourseProgress(BaseModel):
    course_id: str
    total_lessons: int
    completed_lessons: int
    progress: Dict[str, bool] = Field(default_factory=dict)
    percentage: float = 0
