from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from learnhub_backend.interface.base import BaseEntityGet, reject_null_fields
from learnhub_backend.permissions.principal import Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"

class UserRegister(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    password: str = Field(min_length=6, max_length=256)
    role: Role = Role.STUDENT

    @field_validator('name')
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please add a name")
        return value

    @field_validator('email')
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()

class UserLogin(BaseModel):
    email: str
    password: str

class UserGet(BaseEntityGet):
    id: str
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class UserUpdate(BaseModel):
    """Profile fields a user may change. The role is not among them."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    bio: Optional[str] = Field(None, max_length=500)
    profile_image: Optional[str] = Field(None, max_length=2048)

    model_config = ConfigDict(extra='forbid')

    @model_validator(mode='after')
    def name_not_null(self):
        return reject_null_fields(self, ('name',))

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserGet
