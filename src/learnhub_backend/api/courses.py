from typing import Annotated
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.base import ListQuery, MessageResponse
from learnhub_backend.interface.courses import CourseCreate, CourseGet, CourseUpdate
from learnhub_backend.interface.lessons import LessonCreate, LessonGet, LessonList
from learnhub_backend.permissions.auth import get_current_principal, get_optional_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.courses import CourseService

course_router = APIRouter()


@course_router.get("", response_model=list[CourseGet])
def list_courses(
    principal: Annotated[Principal, Depends(get_optional_principal)],
    response: Response,
    params: ListQuery = Depends(),
    db: Session = Depends(get_db),
):
    service = CourseService(db)
    courses = service.list_courses(principal, params.skip, params.limit)
    response.headers["X-Total-Count"] = str(service.courses.count())
    return courses


# registered before /{course_id} so the literal path wins
@course_router.get("/my-taught-courses", response_model=list[CourseGet])
def list_taught_courses(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).list_taught_courses(principal)


@course_router.get("/{course_id}", response_model=CourseGet)
def get_course(
    course_id: str,
    principal: Annotated[Principal, Depends(get_optional_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).get_course(principal, course_id)


@course_router.post("", response_model=CourseGet, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).create_course(principal, payload)


@course_router.put("/{course_id}", response_model=CourseGet)
def update_course(
    course_id: str,
    payload: CourseUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).update_course(principal, course_id, payload)


@course_router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    CourseService(db).delete_course(principal, course_id)
    return MessageResponse(message="Course and all associated data removed")


@course_router.get("/{course_id}/lessons", response_model=list[LessonList])
def list_course_lessons(
    course_id: str,
    principal: Annotated[Principal, Depends(get_optional_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).list_lessons(principal, course_id)


@course_router.post("/{course_id}/lessons", response_model=LessonGet, status_code=status.HTTP_201_CREATED)
def create_course_lesson(
    course_id: str,
    payload: LessonCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return CourseService(db).create_lesson(principal, course_id, payload)
