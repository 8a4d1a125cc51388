"""Error Hierarchy — typed, categorized exceptions for all Mini Notes failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope rendered by the global handler
    - No internal details leaked in user-facing messages (login never reveals
      whether the email exists)

Design Decisions:
    - Single hierarchy with MiniNotesError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    note_id: int | None = None
    retry_after_seconds: int | None = None


class MiniNotesError(Exception):
    """Base exception for all Mini Notes errors."""

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

    def details(self) -> list[dict] | None:
        """Field-level details; only validation errors carry them."""
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        details = self.details()
        if details:
            body["details"] = details
        if self.context.retry_after_seconds is not None:
            body["retry_after_seconds"] = self.context.retry_after_seconds
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(MiniNotesError):
    """Request passed schema validation but violates a domain rule."""
    def __init__(
        self, message: str, field: str, code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> list[dict]:
        return [{"field": self.field, "message": self.message, "type": "value_error"}]


class AuthenticationError(MiniNotesError):
    """Caller identity could not be established."""
    def __init__(
        self, message: str, code: str = "AUTHENTICATION_REQUIRED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Same message whether the email or the password was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email or password is incorrect", "INVALID_CREDENTIALS", context,
        )


class ForbiddenError(MiniNotesError):
    """Caller is authenticated but does not own the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(MiniNotesError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, code: str = "RESOURCE_NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ConflictError(MiniNotesError):
    """Unique value (email, username) already in use."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class RateLimitedError(MiniNotesError):
    """Fixed-window request budget exhausted for this key."""
    def __init__(self, message: str, retry_after_seconds: int | None = None):
        ctx = ErrorContext(retry_after_seconds=retry_after_seconds)
        super().__init__(
            message, "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MiniNotesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class AccountDeletionError(MiniNotesError):
    """Account deletion transaction rolled back."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An error occurred while deleting your account. Please try again.",
            "ACCOUNT_DELETION_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
