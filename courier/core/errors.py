"""Error Hierarchy — typed, categorized exceptions for every Courier failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) abort the authoring request; infrastructure errors (5xx) are critical
    - to_response() produces the REST error envelope
    - EmptyMembershipError / NoAttributableRecipientsError messages are part of the API contract

Design Decisions:
    - Single hierarchy with CourierError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Membership failures are not retried: surfaced immediately as MembershipServiceError
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    author_handle: str | None = None
    target_kind: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class CourierError(Exception):
    """Base exception for all Courier errors."""

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
                    "author_handle": self.context.author_handle,
                    "target_kind": self.context.target_kind,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class MessageValidationError(CourierError):
    """Request shape is malformed, missing or contradictory."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.field = field


class InvalidTargetError(MessageValidationError):
    """Zero or several of recipient_handle / organization_id / region_id given."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "target", "INVALID_TARGET", context)


class InvalidSurveyShapeError(MessageValidationError):
    """Survey payload cannot be persisted as-is."""
    def __init__(
        self, message: str, field: str = "survey",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, field, "INVALID_SURVEY_SHAPE", context)


class EmptyMembershipError(MessageValidationError):
    """Organization or region fan-out resolved to no ground users."""
    def __init__(self, scope: str, context: ErrorContext | None = None):
        super().__init__(
            f"No ground users found in the specified {scope}",
            f"{scope}_id", "EMPTY_MEMBERSHIP", context,
        )
        self.scope = scope


class NoAttributableRecipientsError(MessageValidationError):
    """Ground users exist but none maps to an author handle."""
    def __init__(self, scope: str, context: ErrorContext | None = None):
        super().__init__(
            "No author handles found for any of the ground users "
            f"found in the specified {scope}",
            f"{scope}_id", "NO_ATTRIBUTABLE_RECIPIENTS", context,
        )
        self.scope = scope


class ResourceNotFoundError(CourierError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidOrganizationError(ResourceNotFoundError):
    """Organization id unknown to the membership service."""
    def __init__(self, organization_id: str, context: ErrorContext | None = None):
        super().__init__("Organization", organization_id, context)
        self.code = "INVALID_ORGANIZATION"


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CourierError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class MembershipServiceError(CourierError):
    """Membership collaborator call failed or timed out."""
    def __init__(
        self,
        message: str,
        failure_type: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Membership service error ({failure_type}): {message}",
            "MEMBERSHIP_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.failure_type = failure_type
        self.status_code = status_code
