"""
Authorization engine.

Main components:
- principal: the explicit caller identity (user id + role)
- handlers: Action/Decision types, base handler and registry
- handlers_impl: one handler per resource (course, lesson, quiz, job, storybook, enrollment, progress)
- core: authorize/require entry points and handler registration
- auth: FastAPI dependencies resolving a bearer token into a Principal
"""

from .principal import Principal, Role

from .handlers import (
    Action,
    Decision,
    DenyReason,
    PermissionHandler,
    PermissionRegistry,
    permission_registry,
)

from .core import (
    authorize,
    require,
    initialize_permission_handlers,
)

__all__ = [
    "Principal",
    "Role",
    "Action",
    "Decision",
    "DenyReason",
    "PermissionHandler",
    "PermissionRegistry",
    "permission_registry",
    "authorize",
    "require",
    "initialize_permission_handlers",
]
