from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class ListQuery(BaseModel):
    skip: Optional[int] = Field(0, ge=0)
    limit: Optional[int] = Field(100, ge=1, le=1000)

class BaseEntityGet(BaseModel):
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Update timestamp")

class MessageResponse(BaseModel):
    message: str

def reject_null_fields(model: BaseModel, fields) -> BaseModel:
    """Partial updates may omit a required field but never send it as null."""
    nulls = [name for name in fields if name in model.model_fields_set and getattr(model, name) is None]
    if nulls:
        raise ValueError(f"{', '.join(nulls)} cannot be null")
    return model
