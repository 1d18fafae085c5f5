from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.progress import CourseProgress, UserProgressGet
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.progress import ProgressTracker

progress_router = APIRouter()


@progress_router.post("/complete-lesson/{lesson_id}", response_model=UserProgressGet)
def complete_lesson(
    lesson_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return ProgressTracker(db).mark_complete(principal, lesson_id)


@progress_router.get("/course/{course_id}", response_model=CourseProgress)
def get_course_progress(
    course_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return ProgressTracker(db).get_course_progress(principal, course_id)
