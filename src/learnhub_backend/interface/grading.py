from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from learnhub_backend.interface.progress import UserProgressGet

class QuizSubmission(BaseModel):
    """Answers of one attempt: question id -> selected option.

    The list form [{"question_id": ..., "selected_option": ...}] is accepted too.
    """
    answers: Dict[str, Optional[str]] = Field(default_factory=dict)

    @field_validator('answers', mode='before')
    @classmethod
    def answers_from_list(cls, value):
        if isinstance(value, list):
            answers = {}
            for item in value:
                if not isinstance(item, dict):
                    raise ValueError("Each answer must be an object")
                question_id = item.get("question_id", item.get("questionId"))
                if question_id is None:
                    raise ValueError("Each answer needs a question_id")
                answers[str(question_id)] = item.get("selected_option", item.get("selectedOption"))
            return answers
        return value

class QuestionResult(BaseModel):
    question_id: str
    question_text: str
    selected_option: Optional[str] = None
    correct_answer: str
    is_correct: bool

class GradeResult(BaseModel):
    score: float
    correct_count: int
    total_questions: int
    results: List[QuestionResult] = Field(default_factory=list)
    user_progress: Optional[UserProgressGet] = None
