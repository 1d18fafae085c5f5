from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

URL_PATTERN = r"^(https?|ftp)://[^\s/$.?#].[^\s]*$"

class StorybookCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    pdf_url: str = Field(pattern=URL_PATTERN)
    image_url: Optional[str] = Field(None, pattern=URL_PATTERN)

class StorybookGet(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    pdf_url: str
    image_url: Optional[str] = None
    uploaded_by: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
