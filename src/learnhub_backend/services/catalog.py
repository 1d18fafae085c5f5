import logging
from typing import List
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import InternalServerException, NotFoundException, ValidationException
from learnhub_backend.interface.jobs import JobCreate, JobGet, JobList, JobQuery, JobUpdate
from learnhub_backend.interface.storybooks import StorybookCreate, StorybookGet
from learnhub_backend.model.job import Job
from learnhub_backend.model.storybook import Storybook
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.repositories.base import RepositoryError
from learnhub_backend.repositories.catalog import JobRepository, StorybookRepository
from learnhub_backend.services.base import commit_or_raise

logger = logging.getLogger(__name__)


class JobService:
    """Job board postings, owned through `posted_by`."""

    def __init__(self, db: Session):
        self.db = db
        self.jobs = JobRepository(db)

    def list_jobs(self, principal: Principal, params: JobQuery) -> JobList:
        require(principal, Job, Action.LIST)

        jobs, total = self.jobs.search(params.keyword, params.job_type, params.skip, params.limit)

        return JobList(count=len(jobs), total=total, data=[JobGet.model_validate(job) for job in jobs])

    def get_job(self, principal: Principal, job_id: str) -> JobGet:
        job = self._job_or_404(job_id)

        require(principal, Job, Action.GET, job)

        return JobGet.model_validate(job)

    def my_jobs(self, principal: Principal) -> List[JobGet]:
        require(principal, Job, Action.LIST_OWN)

        return [JobGet.model_validate(job) for job in self.jobs.find_by_poster(principal.user_id)]

    def create_job(self, principal: Principal, data: JobCreate) -> JobGet:
        require(principal, Job, Action.CREATE)

        try:
            job = self.jobs.create(Job(posted_by=principal.user_id, **data.model_dump()))
        except RepositoryError as e:
            logger.error(f"Creating job posting failed: {e}")
            raise InternalServerException("Server error while creating job posting")

        logger.info(f"Job {job.id} posted by {principal.user_id}")

        return JobGet.model_validate(job)

    def update_job(self, principal: Principal, job_id: str, data: JobUpdate) -> JobGet:
        job = self._job_or_404(job_id)

        require(principal, Job, Action.UPDATE, job)

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(job, key, value)

        if not job.application_link and not job.application_email:
            self.db.rollback()
            raise ValidationException("Either an application link or an application email is required")

        commit_or_raise(self.db, "update the job posting")
        self.db.refresh(job)

        return JobGet.model_validate(job)

    def delete_job(self, principal: Principal, job_id: str):
        job = self._job_or_404(job_id)

        require(principal, Job, Action.DELETE, job)

        self.db.delete(job)
        commit_or_raise(self.db, "delete the job posting")

        logger.info(f"Job {job_id} removed by {principal.user_id}")

    def _job_or_404(self, job_id: str) -> Job:
        job = self.jobs.get_by_id_optional(job_id)
        if job is None:
            raise NotFoundException("Job not found")
        return job


class StorybookService:

    def __init__(self, db: Session):
        self.db = db
        self.storybooks = StorybookRepository(db)

    def list_storybooks(self, principal: Principal) -> List[StorybookGet]:
        require(principal, Storybook, Action.LIST)

        return [StorybookGet.model_validate(storybook) for storybook in self.storybooks.list_newest()]

    def create_storybook(self, principal: Principal, data: StorybookCreate) -> StorybookGet:
        require(principal, Storybook, Action.CREATE)

        try:
            storybook = self.storybooks.create(Storybook(uploaded_by=principal.user_id, **data.model_dump()))
        except RepositoryError as e:
            logger.error(f"Creating storybook failed: {e}")
            raise InternalServerException("Server error while creating storybook")

        return StorybookGet.model_validate(storybook)

    def delete_storybook(self, principal: Principal, storybook_id: str):
        storybook = self.storybooks.get_by_id_optional(storybook_id)

        if storybook is None:
            raise NotFoundException("Storybook not found")

        require(principal, Storybook, Action.DELETE, storybook)

        self.db.delete(storybook)
        commit_or_raise(self.db, "delete the storybook")
