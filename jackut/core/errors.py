"""Error Hierarchy — typed, categorized exceptions for all Jackut failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller-recoverable and leave state unchanged
    - Infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with JackutError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    target_id: str | None = None
    debug_info: dict[str, Any] | None = None


class JackutError(Exception):
    """Base exception for all Jackut errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "target_id": self.context.target_id,
                },
            }
        }


# ─── Relationship / Messaging Errors (400-level) ────────────────

class SelfReferenceError(JackutError):
    """A user tried to relate to, or message, itself."""
    def __init__(self, relation: str, context: ErrorContext | None = None):
        super().__init__(
            f"A user cannot be their own {relation}.",
            "SELF_REFERENCE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.relation = relation


class UnknownUserError(JackutError):
    """Referenced user id is not registered."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{user_id}' is not registered.",
            "UNKNOWN_USER", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.user_id = user_id


class UnknownCommunityError(JackutError):
    """Referenced community does not exist."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Community '{name}' does not exist.",
            "UNKNOWN_COMMUNITY", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.name = name


class BlockedByEnemyError(JackutError):
    """Target lists the acting user as an enemy."""
    def __init__(self, display_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid operation: {display_name} is your enemy.",
            "BLOCKED_BY_ENEMY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class DuplicateInviteError(JackutError):
    """A friend invite to the same user is already pending."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Friend already invited, waiting for the invite to be accepted.",
            "DUPLICATE_INVITE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class AlreadyFriendsError(JackutError):
    """Both users are already mutual friends."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User is already a friend.",
            "ALREADY_FRIENDS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class DuplicateRelationError(JackutError):
    """The directional relation already holds."""
    def __init__(self, relation: str, context: ErrorContext | None = None):
        super().__init__(
            f"User is already registered as {relation}.",
            "DUPLICATE_RELATION", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.relation = relation


class NoMessageError(JackutError):
    """No unread message of the requested kind."""
    def __init__(self, kind: str, context: ErrorContext | None = None):
        super().__init__(
            f"There are no {kind} messages.",
            "NO_MESSAGE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.kind = kind


# ─── Account / Community Errors (400-level) ─────────────────────

class InvalidUserDataError(JackutError):
    """Account data rejected (empty login/password, duplicate account, read-only key)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_USER_DATA", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AttributeNotSetError(JackutError):
    """Profile attribute was never filled in."""
    def __init__(self, attribute: str, context: ErrorContext | None = None):
        super().__init__(
            f"Attribute '{attribute}' is not set.",
            "ATTRIBUTE_NOT_SET", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.attribute = attribute


class AuthenticationError(JackutError):
    """Login or password rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid login or password.",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class SessionNotFoundError(JackutError):
    """Session token is empty, unknown or closed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired session.",
            "SESSION_NOT_FOUND", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class DuplicateCommunityError(JackutError):
    """A community with the same name exists."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Community '{name}' already exists.",
            "DUPLICATE_COMMUNITY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class AlreadyMemberError(JackutError):
    """User already belongs to the community."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"User is already a member of '{name}'.",
            "ALREADY_MEMBER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class NotMemberError(JackutError):
    """User does not belong to the community."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"User is not a member of '{name}'.",
            "NOT_MEMBER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SnapshotError(JackutError):
    """Snapshot data could not be restored."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot restore failed: {message}",
            "SNAPSHOT_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(JackutError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
