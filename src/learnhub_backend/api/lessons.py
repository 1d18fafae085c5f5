from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.base import MessageResponse
from learnhub_backend.interface.lessons import LessonGet, LessonUpdate
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.courses import CourseService

lesson_router = APIRouter()


@lesson_router.get("/{lesson_id}", response_model=LessonGet)
def get_lesson(
    lesson_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).get_lesson(principal, lesson_id)


@lesson_router.put("/{lesson_id}", response_model=LessonGet)
def update_lesson(
    lesson_id: str,
    payload: LessonUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).update_lesson(principal, lesson_id, payload)


@lesson_router.delete("/{lesson_id}", response_model=MessageResponse)
def delete_lesson(
    lesson_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    CourseService(db).delete_lesson(principal, lesson_id)
    return MessageResponse(message="Lesson removed")
