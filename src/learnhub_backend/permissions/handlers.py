import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Type
from pydantic import BaseModel
from learnhub_backend.permissions.principal import Principal, Role

logger = logging.getLogger(__name__)


class Action(str, Enum):
    LIST = "list"
    LIST_OWN = "list_own"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    VIEW_CONTENT = "view_content"
    SUBMIT = "submit"
    ENROLL = "enroll"
    UNENROLL = "unenroll"
    CHECK = "check"
    COMPLETE = "complete"
    VIEW_PROGRESS = "view_progress"


MUTATING_ACTIONS = frozenset({Action.CREATE, Action.UPDATE, Action.DELETE})


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    WRONG_ROLE = "wrong_role"
    NOT_OWNER = "not_owner"
    NOT_ENROLLED = "not_enrolled"
    NOT_SELF = "not_self"
    ADMIN_ONLY = "admin_only"
    NOT_PERMITTED = "not_permitted"


class Decision(BaseModel):
    allowed: bool
    reason: Optional[DenyReason] = None
    message: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason, message: Optional[str] = None) -> "Decision":
        return cls(allowed=False, reason=reason, message=message or "Not authorized")


class PermissionHandler(ABC):
    """Base class for entity-specific permission handlers"""

    # Actions an unauthenticated caller may perform
    PUBLIC_ACTIONS: frozenset = frozenset()

    def __init__(self, entity: Type[Any]):
        self.entity = entity
        self.resource_name = entity.__tablename__

    def decide(self, principal: Principal, action: Action, resource: Any = None, context: Optional[Dict[str, Any]] = None) -> Decision:
        if not principal.is_authenticated:
            if action in self.PUBLIC_ACTIONS:
                return Decision.allow()
            return Decision.deny(DenyReason.UNAUTHENTICATED, "Authentication required")

        return self.can_perform_action(principal, action, resource, context or {})

    @abstractmethod
    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        """Decide for an authenticated principal.

        Args:
            principal: Current principal
            action: Action to perform
            resource: The already fetched entity the action targets (see the handler for which one)
            context: Extra facts resolved by the caller, e.g. {"enrolled_course_ids": {...}}
        """
        pass

    def check_admin(self, principal: Principal) -> bool:
        return principal.is_admin

    def check_owner(self, principal: Principal, owner_id: Optional[str]) -> bool:
        return principal.is_owner(owner_id)

    def check_enrolled(self, context: Dict[str, Any], course_id: Optional[str]) -> bool:
        enrolled = context.get("enrolled_course_ids") or set()
        return course_id is not None and str(course_id) in {str(c) for c in enrolled}

    def owner_mutation(self, principal: Principal, owner_id: Optional[str], noun: str, action: Action) -> Decision:
        """Instructor-and-owner rule shared by all owned resources."""
        if not principal.has_role(Role.INSTRUCTOR):
            return Decision.deny(
                DenyReason.WRONG_ROLE,
                f"User role '{principal.role.value if principal.role else None}' is not authorized to {action.value} this {noun}"
            )
        if not self.check_owner(principal, owner_id):
            return Decision.deny(DenyReason.NOT_OWNER, f"Not authorized to {action.value} this {noun}")
        return Decision.allow()


class PermissionRegistry:
    """Registry for managing entity permission handlers"""

    _instance = None
    _handlers: Dict[Type[Any], PermissionHandler] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def register(self, entity: Type[Any], handler: PermissionHandler):
        self._handlers[entity] = handler

    def get_handler(self, entity: Type[Any]) -> Optional[PermissionHandler]:
        return self._handlers.get(entity)

    def authorize(self, principal: Principal, entity: Type[Any], action: Action, resource: Any = None, context: Optional[Dict[str, Any]] = None) -> Decision:
        handler = self.get_handler(entity)
        if not handler:
            # Fallback to admin-only if no handler registered
            logger.debug(f"No permission handler for {getattr(entity, '__tablename__', entity)}, admin only")
            if principal.is_admin:
                return Decision.allow()
            return Decision.deny(DenyReason.ADMIN_ONLY, "Only admins can access this resource")

        return handler.decide(principal, action, resource, context)


# Global registry instance
permission_registry = PermissionRegistry()
