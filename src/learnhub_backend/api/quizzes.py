from typing import Annotated, Union
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.base import MessageResponse
from learnhub_backend.interface.grading import GradeResult, QuizSubmission
from learnhub_backend.interface.quizzes import QuizCreate, QuizGet, QuizStudentGet, QuizUpdate
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.grading import QuizGradingEngine
from learnhub_backend.services.quizzes import QuizService

quiz_router = APIRouter()


@quiz_router.post("", response_model=QuizGet, status_code=status.HTTP_201_CREATED)
def create_quiz(
    payload: QuizCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return QuizService(db).create_quiz(principal, payload)


@quiz_router.get("/{quiz_id}", response_model=Union[QuizGet, QuizStudentGet])
def get_quiz(
    quiz_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return QuizService(db).get_quiz(principal, quiz_id)


@quiz_router.put("/{quiz_id}", response_model=QuizGet)
def update_quiz(
    quiz_id: str,
    payload: QuizUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return QuizService(db).update_quiz(principal, quiz_id, payload)


@quiz_router.delete("/{quiz_id}", response_model=MessageResponse)
def delete_quiz(
    quiz_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    QuizService(db).delete_quiz(principal, quiz_id)
    return MessageResponse(message="Quiz removed")


@quiz_router.post("/{quiz_id}/submit", response_model=GradeResult)
def submit_quiz(
    quiz_id: str,
    payload: QuizSubmission,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return QuizGradingEngine(db).submit(principal, quiz_id, payload)
