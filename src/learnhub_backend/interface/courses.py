from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from learnhub_backend.interface.base import BaseEntityGet

CourseCategory = Literal[
    'Web Development',
    'Web Design',
    'Backend Development',
    'Programming',
    'Design',
    'Computer Science',
    'Data Science',
    'Mobile Development',
]

class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: CourseCategory
    price: float = Field(ge=0)
    image_url: Optional[str] = Field(None, max_length=2048)

class CourseGet(BaseEntityGet):
    id: str
    title: str
    description: str
    instructor: str
    price: float
    image_url: Optional[str] = None
    category: str
    rating_average: float = 0
    rating_count: int = 0

    model_config = ConfigDict(from_attributes=True)

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[CourseCategory] = None
    price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=2048)
