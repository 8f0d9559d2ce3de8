"""Error Hierarchy: typed, categorized exceptions for every template engine failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - NotFound, InvalidInput and Conflict are recoverable by the caller, never fatal
    - Tenant mismatch is reported as NotFound, indistinguishable from absence
    - to_response() produces the transport envelope {"error": message}

Design Decisions:
    - Single hierarchy with DocFactoryError base: one FastAPI handler catches all
    - Conflict maps to 500: an identifier collision means the id generator is broken
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


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
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tenant_id: str | None = None
    template_id: str | None = None
    version_number: int | None = None


class DocFactoryError(Exception):
    """Base exception for all template engine errors."""

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
        """Convert to the transport error body."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "tenant_id": self.context.tenant_id,
            "template_id": self.context.template_id,
            "version_number": self.context.version_number,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(DocFactoryError):
    """Input rejected: structural failure or mutation of a deleted template."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class TemplateValidationError(InvalidInputError):
    """Field-level structural check failed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.code = "VALIDATION_ERROR"
        self.category = ErrorCategory.VALIDATION
        self.field = field


class NotFoundError(DocFactoryError):
    """Requested resource does not exist for this tenant."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConflictError(DocFactoryError):
    """Identifier collision on insert."""
    def __init__(self, resource_type: str, resource_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} '{resource_id}' already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
