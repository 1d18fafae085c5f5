import click
from pydantic import ValidationError

from learnhub_backend.api.exceptions import ConflictException
from learnhub_backend.database import get_db
from learnhub_backend.interface.users import UserRegister
from learnhub_backend.permissions.principal import Role
from learnhub_backend.services.identity import IdentityService

@click.command()
@click.option("--name", "-n", "name", prompt=True)
@click.option("--email", "-e", "email", prompt=True)
@click.option("--password", "-p", "password", prompt=True, hide_input=True)
@click.option("--role", "-r", "role", type=click.Choice([role.value for role in Role]), default=Role.STUDENT.value, show_default=True)
def create_user(name, email, password, role):
    """Create a user with any role, admins included."""

    try:
        payload = UserRegister(name=name, email=email, password=password, role=role)
    except ValidationError as e:
        raise click.BadParameter(str(e))

    with next(get_db()) as db:
        try:
            token = IdentityService(db).register(payload, allow_admin=True)
        except ConflictException as e:
            raise click.ClickException(str(e.detail))

    click.echo(f"Created {token.user.role.value} {token.user.email} ({token.user.id})")
