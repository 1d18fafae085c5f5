from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from learnhub_backend.api.exceptions import UnauthorizedException


class Role(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class Principal(BaseModel):
    """The authenticated caller. Passed explicitly into every operation."""

    user_id: Optional[str] = None
    role: Optional[Role] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('role', mode='before')
    @classmethod
    def normalize_role(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode='after')
    def role_requires_identity(self):
        if self.role is not None and self.user_id is None:
            raise ValueError("A principal with a role must carry a user id")
        return self

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def is_owner(self, owner_id: Optional[str]) -> bool:
        """Ownership fields are opaque strings; compare them as such."""
        if owner_id is None or self.user_id is None:
            return False
        return str(owner_id) == str(self.user_id)

    def get_user_id_or_throw(self) -> str:
        if self.user_id is None:
            raise UnauthorizedException("Authentication required")
        return self.user_id
