import pytest
from click.testing import CliRunner

from learnhub_backend.api.exceptions import ConflictException, ForbiddenException, UnauthorizedException
from learnhub_backend.interface.users import UserRegister, UserUpdate
from learnhub_backend.model.auth import User
from learnhub_backend.permissions.principal import Principal, Role
from learnhub_backend.services.identity import IdentityService


def register(service, email="grace@example.com", role=Role.STUDENT, **kwargs):
    return service.register(UserRegister(name="Grace", email=email, password="secret123", role=role), **kwargs)


def test_register_hashes_password_and_issues_token(test_db):
    token = register(IdentityService(test_db), role=Role.INSTRUCTOR)

    stored = test_db.query(User).filter(User.email == "grace@example.com").one()
    assert stored.password != "secret123"
    assert stored.role == "instructor"
    assert token.user.id == stored.id
    assert token.access_token


def test_register_duplicate_email(test_db):
    service = IdentityService(test_db)
    register(service)

    with pytest.raises(ConflictException):
        register(service, email="GRACE@example.com")


def test_public_admin_registration_refused(test_db):
    with pytest.raises(ForbiddenException):
        register(IdentityService(test_db), role=Role.ADMIN)

    token = register(IdentityService(test_db), role=Role.ADMIN, allow_admin=True)
    assert token.user.role == Role.ADMIN


def test_login(test_db):
    service = IdentityService(test_db)
    register(service)

    assert service.login(" grace@example.com", "secret123").user.email == "grace@example.com"
    with pytest.raises(UnauthorizedException):
        service.login("grace@example.com", "wrong")
    with pytest.raises(UnauthorizedException):
        service.login("nobody@example.com", "secret123")


def test_profile_update_keeps_role(test_db):
    service = IdentityService(test_db)
    user = register(service).user
    principal = Principal(user_id=user.id, role=user.role)

    profile = service.update_profile(principal, UserUpdate(name="Grace H.", phone="123"))

    assert profile.name == "Grace H."
    assert profile.phone == "123"
    assert profile.role == Role.STUDENT


def test_ensure_admin_is_idempotent(test_db):
    service = IdentityService(test_db)

    first = service.ensure_admin("Admin", "admin@example.com", "secret123")
    second = service.ensure_admin("Admin", "admin@example.com", "other-secret")

    assert first.id == second.id
    assert first.role == "admin"
    assert test_db.query(User).count() == 1


def test_cli_create_user(test_db, monkeypatch):
    from learnhub_backend.cli import admin as admin_cli
    from learnhub_backend.cli.cli import cli

    monkeypatch.setattr(admin_cli, "get_db", lambda: iter([test_db]))

    result = CliRunner().invoke(cli, [
        "create-user", "-n", "Root", "-e", "root@example.com", "-p", "secret123", "-r", "admin",
    ])

    assert result.exit_code == 0, result.output
    assert "Created admin root@example.com" in result.output
    assert test_db.query(User).filter(User.email == "root@example.com").one().role == "admin"
