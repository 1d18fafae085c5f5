from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from learnhub_backend.interface.base import BaseEntityGet

URL_PATTERN = r"^$|^https?://\S+$"

class LessonCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    video_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    image_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    content: Optional[str] = Field(None, max_length=5000)
    external_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    order: int = Field(0, ge=0)

    @field_validator('title', 'description')
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

class LessonList(BaseEntityGet):
    """Lesson metadata, visible without enrollment."""
    id: str
    course_id: str
    instructor_id: str
    title: str
    description: str
    order: int
    quiz_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class LessonGet(LessonList):
    video_url: Optional[str] = None
    image_url: Optional[str] = None
    content: Optional[str] = None
    external_url: Optional[str] = None

class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    video_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    image_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    content: Optional[str] = Field(None, max_length=5000)
    external_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    order: Optional[int] = Field(None, ge=0)
