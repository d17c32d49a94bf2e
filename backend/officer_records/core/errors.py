"""Error Hierarchy — typed, categorized exceptions for all officer-records failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with OfficerRecordsError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to the logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    personnel_id: int | None = None
    user_message: str | None = None


class OfficerRecordsError(Exception):
    """Base exception for all officer-records errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "personnel_id": self.context.personnel_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class MissingPensionInputError(OfficerRecordsError):
    """Pension computation attempted without its required inputs."""
    def __init__(self, missing_fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"{', '.join(missing_fields)} wajib diisi",
            "MISSING_PENSION_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.missing_fields = missing_fields

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["missing_fields"] = self.missing_fields
        return response


class InvalidCategoryError(OfficerRecordsError):
    """Query category outside the accepted set."""
    def __init__(
        self, category: str, allowed: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unknown category '{category}'. Use one of: {', '.join(allowed)}",
            "INVALID_CATEGORY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.category_value = category
        self.allowed = allowed


class DuplicateNrpError(OfficerRecordsError):
    """Another personnel record already uses this NRP."""
    def __init__(self, nrp: str, context: ErrorContext | None = None):
        super().__init__(
            f"NRP '{nrp}' already exists",
            "DUPLICATE_NRP", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.nrp = nrp


class ResourceNotFoundError(OfficerRecordsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(OfficerRecordsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
