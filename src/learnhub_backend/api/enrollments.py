from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.courses import CourseGet
from learnhub_backend.interface.enrollments import EnrollmentCheck, EnrollmentResult
from learnhub_backend.permissions.auth import get_current_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.enrollment import EnrollmentLedger

enrollment_router = APIRouter()


@enrollment_router.get("/my-courses", response_model=list[CourseGet])
def list_my_courses(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return EnrollmentLedger(db).my_courses(principal)


@enrollment_router.get("/check/{user_id}/{course_id}", response_model=EnrollmentCheck)
def check_enrollment(
    user_id: str,
    course_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return EnrollmentLedger(db).check_enrollment(principal, user_id, course_id)


@enrollment_router.post("/{user_id}/{course_id}", response_model=EnrollmentResult)
def enroll(
    user_id: str,
    course_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return EnrollmentLedger(db).enroll(principal, user_id, course_id)


@enrollment_router.delete("/{user_id}/{course_id}", response_model=EnrollmentResult)
def unenroll(
    user_id: str,
    course_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return EnrollmentLedger(db).unenroll(principal, user_id, course_id)
