from typing import List
from pydantic import BaseModel

class EnrollmentResult(BaseModel):
    message: str
    user_id: str
    course_id: str
    enrolled_courses: List[str]

class EnrollmentCheck(BaseModel):
    is_enrolled: bool
