from typing import Any, Dict
from learnhub_backend.permissions.handlers import (
    Action,
    Decision,
    DenyReason,
    MUTATING_ACTIONS,
    PermissionHandler,
)
from learnhub_backend.permissions.principal import Principal, Role


class CoursePermissionHandler(PermissionHandler):
    """Permission handler for Course. `resource` is the Course."""

    PUBLIC_ACTIONS = frozenset({Action.LIST, Action.GET})

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        if action in (Action.LIST, Action.GET):
            return Decision.allow()

        if self.check_admin(principal):
            return Decision.allow()

        if action == Action.CREATE:
            if principal.has_role(Role.INSTRUCTOR):
                return Decision.allow()
            return Decision.deny(DenyReason.WRONG_ROLE, "Only instructors or admins can create courses")

        if action in (Action.UPDATE, Action.DELETE):
            return self.owner_mutation(principal, getattr(resource, "instructor", None), "course", action)

        if action == Action.LIST_OWN:
            if principal.has_role(Role.INSTRUCTOR):
                return Decision.allow()
            return Decision.deny(DenyReason.WRONG_ROLE, "Only instructors or admins have taught courses")

        return Decision.deny(DenyReason.NOT_PERMITTED)


class LessonPermissionHandler(PermissionHandler):
    """Permission handler for Lesson.

    `resource` is the parent Course for CREATE and the Lesson otherwise;
    VIEW_CONTENT expects the lesson's course in context["course"].
    """

    PUBLIC_ACTIONS = frozenset({Action.LIST})

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        if action == Action.LIST:
            return Decision.allow()

        if self.check_admin(principal):
            return Decision.allow()

        if action == Action.CREATE:
            # adding lessons is gated by the course owner
            return self.owner_mutation(principal, getattr(resource, "instructor", None), "course", action)

        if action in (Action.UPDATE, Action.DELETE):
            return self.owner_mutation(principal, getattr(resource, "instructor_id", None), "lesson", action)

        if action == Action.VIEW_CONTENT:
            course = context.get("course")
            if self.check_owner(principal, getattr(course, "instructor", None)):
                return Decision.allow()
            if principal.has_role(Role.STUDENT) and self.check_enrolled(context, getattr(resource, "course_id", None)):
                return Decision.allow()
            return Decision.deny(
                DenyReason.NOT_ENROLLED,
                "Not authorized to view this lesson content. Please enroll in the course."
            )

        return Decision.deny(DenyReason.NOT_PERMITTED)


class QuizPermissionHandler(PermissionHandler):
    """Permission handler for Quiz.

    Quiz ownership is resolved through the owning lesson's instructor, never
    the course's, so `resource` is always the Lesson the quiz belongs to.
    """

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        # Submission is student-only, admins included in the refusal
        if action == Action.SUBMIT:
            if not principal.has_role(Role.STUDENT):
                return Decision.deny(DenyReason.WRONG_ROLE, "Only students can submit quizzes.")
            if self.check_enrolled(context, getattr(resource, "course_id", None)):
                return Decision.allow()
            return Decision.deny(
                DenyReason.NOT_ENROLLED,
                "You must be enrolled in this course to submit this quiz."
            )

        if self.check_admin(principal):
            return Decision.allow()

        if action in MUTATING_ACTIONS:
            return self.owner_mutation(principal, getattr(resource, "instructor_id", None), "quiz", action)

        if action == Action.VIEW_CONTENT:
            if self.check_owner(principal, getattr(resource, "instructor_id", None)):
                return Decision.allow()
            if principal.has_role(Role.STUDENT) and self.check_enrolled(context, getattr(resource, "course_id", None)):
                return Decision.allow()
            return Decision.deny(
                DenyReason.NOT_ENROLLED,
                "Not authorized to view this quiz. Please enroll in the course."
            )

        return Decision.deny(DenyReason.NOT_PERMITTED)


class JobPermissionHandler(PermissionHandler):
    """Permission handler for Job. `resource` is the Job."""

    PUBLIC_ACTIONS = frozenset({Action.LIST, Action.GET})

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        if action in (Action.LIST, Action.GET):
            return Decision.allow()

        if self.check_admin(principal):
            return Decision.allow()

        if action in (Action.CREATE, Action.LIST_OWN):
            if principal.has_role(Role.INSTRUCTOR):
                return Decision.allow()
            return Decision.deny(DenyReason.WRONG_ROLE, "Only instructors or admins can manage job postings")

        if action in (Action.UPDATE, Action.DELETE):
            return self.owner_mutation(principal, getattr(resource, "posted_by", None), "job", action)

        return Decision.deny(DenyReason.NOT_PERMITTED)


class StorybookPermissionHandler(PermissionHandler):
    """Storybooks are readable by any signed-in user and managed by admins only."""

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        if action in (Action.LIST, Action.GET):
            return Decision.allow()

        if self.check_admin(principal):
            return Decision.allow()

        if action in MUTATING_ACTIONS:
            return Decision.deny(DenyReason.ADMIN_ONLY, "Only admins can manage storybooks")

        return Decision.deny(DenyReason.NOT_PERMITTED)


class EnrollmentPermissionHandler(PermissionHandler):
    """Enrollment set of a user. The target user id is passed as context["user_id"].

    Enroll and unenroll are self-service for students only; unlike every other
    resource, admins cannot act on behalf of a student here.
    """

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        target_user_id = context.get("user_id")

        if action in (Action.ENROLL, Action.UNENROLL):
            verb = "enroll" if action == Action.ENROLL else "unenroll"
            if not principal.has_role(Role.STUDENT):
                return Decision.deny(
                    DenyReason.WRONG_ROLE,
                    f"User role '{principal.role.value if principal.role else None}' is not authorized to {verb}"
                )
            if not self.check_owner(principal, target_user_id):
                return Decision.deny(DenyReason.NOT_SELF, f"Not authorized to {verb} this user")
            return Decision.allow()

        if action == Action.LIST_OWN:
            return Decision.allow()

        if self.check_admin(principal):
            return Decision.allow()

        if action == Action.CHECK:
            if self.check_owner(principal, target_user_id):
                return Decision.allow()
            return Decision.deny(DenyReason.NOT_SELF, "Not authorized to check enrollment for this user")

        return Decision.deny(DenyReason.NOT_PERMITTED)


class ProgressPermissionHandler(PermissionHandler):
    """Lesson completion and course progress.

    COMPLETE takes no resource; VIEW_PROGRESS takes the Course.
    """

    def can_perform_action(self, principal: Principal, action: Action, resource: Any, context: Dict[str, Any]) -> Decision:
        # Completion is recorded for students only; enrollment is not verified here
        if action == Action.COMPLETE:
            if principal.has_role(Role.STUDENT):
                return Decision.allow()
            return Decision.deny(DenyReason.WRONG_ROLE, "Only students can complete lessons")

        if self.check_admin(principal):
            return Decision.allow()

        if action == Action.VIEW_PROGRESS:
            if self.check_owner(principal, getattr(resource, "instructor", None)):
                return Decision.allow()
            if principal.has_role(Role.STUDENT) and self.check_enrolled(context, getattr(resource, "id", None)):
                return Decision.allow()
            return Decision.deny(DenyReason.NOT_ENROLLED, "Not authorized to view progress for this course.")

        return Decision.deny(DenyReason.NOT_PERMITTED)
