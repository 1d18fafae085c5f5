from sqlalchemy import Column, DateTime, ForeignKey, String, func

from .base import Base, generate_id


class Storybook(Base):
    __tablename__ = 'storybook'

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    description = Column(String(500))
    pdf_url = Column(String(2048), nullable=False)
    image_url = Column(String(2048))
    uploaded_by = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
