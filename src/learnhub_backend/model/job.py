from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text, func

from .base import Base, generate_id

SALARY_RANGES = (
    'Not disclosed', 'Below $30k', '$30k - $50k', '$50k - $70k',
    '$70k - $100k', '$100k - $150k', 'Above $150k', 'Competitive',
)

JOB_TYPES = ('Full-time', 'Part-time', 'Contract', 'Internship', 'Temporary')


class Job(Base):
    __tablename__ = 'job'

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    salary_range = Column(String(32), nullable=False, default='Not disclosed')
    job_type = Column(String(32), nullable=False, default='Full-time')
    application_link = Column(String(2048))
    application_email = Column(String(320))
    posted_by = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    posted_at = Column(DateTime(True), nullable=False, server_default=func.now())
