from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from learnhub_backend.interface.base import ListQuery, reject_null_fields

SalaryRange = Literal[
    'Not disclosed', 'Below $30k', '$30k - $50k', '$50k - $70k',
    '$70k - $100k', '$100k - $150k', 'Above $150k', 'Competitive',
]

JobType = Literal['Full-time', 'Part-time', 'Contract', 'Internship', 'Temporary']

URL_PATTERN = r"^https?://\S+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"

class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    company: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=50)
    requirements: List[str] = Field(default_factory=list)
    salary_range: SalaryRange = 'Not disclosed'
    job_type: JobType = 'Full-time'
    application_link: Optional[str] = Field(None, pattern=URL_PATTERN)
    application_email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)

    @model_validator(mode='after')
    def application_channel_required(self):
        if not self.application_link and not self.application_email:
            raise ValueError("Either an application link or an application email is required")
        return self

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    company: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=50)
    requirements: Optional[List[str]] = None
    salary_range: Optional[SalaryRange] = None
    job_type: Optional[JobType] = None
    application_link: Optional[str] = Field(None, pattern=URL_PATTERN)
    application_email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)

    @model_validator(mode='after')
    def required_columns_not_null(self):
        return reject_null_fields(self, ('title', 'company', 'location', 'description', 'requirements', 'salary_range', 'job_type'))

class JobGet(BaseModel):
    id: str
    title: str
    company: str
    location: str
    description: str
    requirements: List[str] = Field(default_factory=list)
    salary_range: str
    job_type: str
    application_link: Optional[str] = None
    application_email: Optional[str] = None
    posted_by: str
    posted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class JobQuery(ListQuery):
    keyword: Optional[str] = None
    job_type: Optional[JobType] = None
    limit: Optional[int] = Field(10, ge=1, le=100)

class JobList(BaseModel):
    count: int
    total: int
    data: List[JobGet]
