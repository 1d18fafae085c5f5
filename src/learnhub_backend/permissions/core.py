"""
Permission checking entry points built on the handler registry.

Every route and service asks `authorize`/`require` instead of comparing
roles and ownership fields inline.
"""

import logging
from typing import Any, Dict, Optional, Type

from learnhub_backend.api.exceptions import ForbiddenException, UnauthorizedException
from learnhub_backend.permissions.handlers import Action, Decision, DenyReason, permission_registry
from learnhub_backend.permissions.handlers_impl import (
    CoursePermissionHandler,
    LessonPermissionHandler,
    QuizPermissionHandler,
    JobPermissionHandler,
    StorybookPermissionHandler,
    EnrollmentPermissionHandler,
    ProgressPermissionHandler,
)
from learnhub_backend.permissions.principal import Principal

# Import models for registration
from learnhub_backend.model.auth import UserEnrolledCourse
from learnhub_backend.model.course import Course, Lesson, Quiz
from learnhub_backend.model.progress import UserProgress
from learnhub_backend.model.job import Job
from learnhub_backend.model.storybook import Storybook

logger = logging.getLogger(__name__)


def initialize_permission_handlers():
    """Initialize and register all permission handlers"""

    permission_registry.register(Course, CoursePermissionHandler(Course))
    permission_registry.register(Lesson, LessonPermissionHandler(Lesson))
    permission_registry.register(Quiz, QuizPermissionHandler(Quiz))
    permission_registry.register(Job, JobPermissionHandler(Job))
    permission_registry.register(Storybook, StorybookPermissionHandler(Storybook))
    permission_registry.register(UserEnrolledCourse, EnrollmentPermissionHandler(UserEnrolledCourse))
    permission_registry.register(UserProgress, ProgressPermissionHandler(UserProgress))


def authorize(
    principal: Principal,
    entity: Type[Any],
    action: Action,
    resource: Any = None,
    context: Optional[Dict[str, Any]] = None,
) -> Decision:
    """Pure ALLOW/DENY decision for (principal, action, resource)."""
    return permission_registry.authorize(principal, entity, action, resource, context)


def require(
    principal: Principal,
    entity: Type[Any],
    action: Action,
    resource: Any = None,
    context: Optional[Dict[str, Any]] = None,
) -> Decision:
    """Like `authorize`, but raises when the decision is DENY."""
    decision = authorize(principal, entity, action, resource, context)

    if decision.allowed:
        return decision

    logger.warning(
        f"Denied {action.value} on {entity.__tablename__} for user {principal.user_id}: {decision.reason.value}"
    )

    if decision.reason == DenyReason.UNAUTHENTICATED:
        raise UnauthorizedException(decision.message)

    raise ForbiddenException(detail=decision.message, reason=decision.reason.value)


# Initialize handlers on module import
initialize_permission_handlers()
