from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from learnhub_backend.interface.base import BaseEntityGet, reject_null_fields

class QuizQuestionCreate(BaseModel):
    question_text: str = Field(min_length=1)
    options: List[str]
    correct_answer: str

    @field_validator('question_text')
    @classmethod
    def strip_question_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Question text is required")
        return value

    @field_validator('options')
    @classmethod
    def validate_options(cls, value: List[str]) -> List[str]:
        if len(value) < 2:
            raise ValueError(f"A question must have at least 2 options, but has {len(value)}")
        if len(set(value)) != len(value):
            raise ValueError("Question options must be distinct")
        return value

    @model_validator(mode='after')
    def correct_answer_among_options(self):
        if self.correct_answer not in self.options:
            raise ValueError(f'Correct answer "{self.correct_answer}" is not one of the provided options.')
        return self

class QuizCreate(BaseModel):
    lesson_id: str
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    questions: List[QuizQuestionCreate] = Field(min_length=1)

class QuizUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    questions: Optional[List[QuizQuestionCreate]] = Field(None, min_length=1)

    @model_validator(mode='after')
    def title_not_null(self):
        return reject_null_fields(self, ('title',))

class QuizQuestionStudentGet(BaseModel):
    """A question as shown before submission: no answer key."""
    id: str
    question_text: str
    options: List[str]

    model_config = ConfigDict(from_attributes=True)

class QuizQuestionGet(QuizQuestionStudentGet):
    correct_answer: str

class QuizStudentGet(BaseEntityGet):
    id: str
    lesson_id: str
    title: str
    description: Optional[str] = None
    questions: List[QuizQuestionStudentGet]

    model_config = ConfigDict(from_attributes=True)

class QuizGet(QuizStudentGet):
    questions: List[QuizQuestionGet]
