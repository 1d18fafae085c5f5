from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnhub_backend.database import get_db
from learnhub_backend.interface.base import MessageResponse
from learnhub_backend.interface.jobs import JobCreate, JobGet, JobList, JobQuery, JobUpdate
from learnhub_backend.permissions.auth import get_current_principal, get_optional_principal
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.catalog import JobService

job_router = APIRouter()


@job_router.get("", response_model=JobList)
def list_jobs(
    principal: Annotated[Principal, Depends(get_optional_principal)],
    params: JobQuery = Depends(),
    db: Session = Depends(get_db),
):
    return JobService(db).list_jobs(principal, params)


@job_router.get("/my", response_model=list[JobGet])
def list_my_jobs(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return JobService(db).my_jobs(principal)


@job_router.get("/{job_id}", response_model=JobGet)
def get_job(
    job_id: str,
    principal: Annotated[Principal, Depends(get_optional_principal)],
    db: Session = Depends(get_db),
):
    return JobService(db).get_job(principal, job_id)


@job_router.post("", response_model=JobGet, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return JobService(db).create_job(principal, payload)


@job_router.put("/{job_id}", response_model=JobGet)
def update_job(
    job_id: str,
    payload: JobUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return JobService(db).update_job(principal, job_id, payload)


@job_router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    JobService(db).delete_job(principal, job_id)
    return MessageResponse(message="Job posting removed")
