"""
Authentication dependencies producing the request Principal.

The principal is resolved once per request from the bearer token and then
handed to services explicitly.
"""

import logging
from typing import Annotated, Optional
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import UnauthorizedException
from learnhub_backend.auth.security import decode_access_token
from learnhub_backend.database import get_db
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def parse_authorization_header(request: Request) -> Optional[str]:
    """Return the bearer token, or None when no Authorization header is sent."""

    authorization = request.headers.get("Authorization")
    if not authorization:
        return None

    scheme, param = get_authorization_scheme_param(authorization)

    if scheme.lower() != "bearer" or not param:
        raise UnauthorizedException("Not authorized: bearer token expected")

    return param


def principal_from_token(token: str, db: Session) -> Principal:
    payload = decode_access_token(token)

    user = UserRepository(db).get_by_id_optional(payload.sub)
    if user is None:
        raise UnauthorizedException("Not authorized: user not found from token")

    # the stored role is authoritative, not the one in the token
    return Principal(user_id=str(user.id), role=user.role)


def get_current_principal(
    token: Annotated[Optional[str], Depends(parse_authorization_header)],
    db: Session = Depends(get_db),
) -> Principal:
    """Main dependency for getting the current authenticated principal."""

    if token is None:
        raise UnauthorizedException("Not authorized: no token provided")

    return principal_from_token(token, db)


def get_optional_principal(
    request: Request,
    db: Session = Depends(get_db),
) -> Principal:
    """Principal for public routes.

    Anonymous when no usable token is sent, so a stale token never blocks
    public reads.
    """

    try:
        token = parse_authorization_header(request)
        if token is None:
            return Principal.anonymous()
        return principal_from_token(token, db)
    except UnauthorizedException as e:
        logger.debug(f"Ignoring credentials on public route {request.url.path}: {e.detail}")
        return Principal.anonymous()
