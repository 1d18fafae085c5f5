import logging
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import (
    ConflictException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    UnauthorizedException,
)
from learnhub_backend.auth.security import create_access_token, hash_password, verify_password
from learnhub_backend.interface.users import TokenResponse, UserGet, UserRegister, UserUpdate
from learnhub_backend.model.auth import User
from learnhub_backend.permissions.principal import Principal, Role
from learnhub_backend.repositories.base import DuplicateError, RepositoryError
from learnhub_backend.repositories.users import UserRepository
from learnhub_backend.services.base import commit_or_raise

logger = logging.getLogger(__name__)


class IdentityService:
    """Identity & credential store: registration, login and profiles."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def register(self, data: UserRegister, allow_admin: bool = False) -> TokenResponse:
        if data.role == Role.ADMIN and not allow_admin:
            raise ForbiddenException("Admin accounts cannot be self-registered", reason="admin_only")

        if self.users.find_by_email(data.email) is not None:
            raise ConflictException("User already exists")

        user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
            role=data.role.value,
        )

        try:
            user = self.users.create(user, {"email": data.email})
        except DuplicateError:
            raise ConflictException("Email already registered")
        except RepositoryError as e:
            logger.error(f"User registration failed: {e}")
            raise InternalServerException("User registration failed")

        logger.info(f"Registered user {user.id} with role {user.role}")

        return self._token_response(user)

    def login(self, email: str, password: str) -> TokenResponse:
        user = self.users.find_by_email(email.strip())

        if user is None or not verify_password(password, user.password):
            raise UnauthorizedException("Invalid email or password")

        return self._token_response(user)

    def get_profile(self, principal: Principal) -> UserGet:
        user = self.users.get_by_id_optional(principal.get_user_id_or_throw())

        if user is None:
            raise NotFoundException("User not found")

        return UserGet.model_validate(user)

    def update_profile(self, principal: Principal, data: UserUpdate) -> UserGet:
        user = self.users.get_by_id_optional(principal.get_user_id_or_throw())

        if user is None:
            raise NotFoundException("User not found")

        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(user, key, value)

        commit_or_raise(self.db, "update the profile")
        self.db.refresh(user)

        return UserGet.model_validate(user)

    def ensure_admin(self, name: str, email: str, password: str) -> User:
        """Create the bootstrap admin unless a user with that email exists."""
        existing = self.users.find_by_email(email)

        if existing is not None:
            return existing

        self.register(UserRegister(name=name, email=email, password=password, role=Role.ADMIN), allow_admin=True)
        logger.info(f"Bootstrap admin {email} created")

        return self.users.find_by_email(email)

    def _token_response(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(str(user.id), user.role),
            user=UserGet.model_validate(user),
        )
