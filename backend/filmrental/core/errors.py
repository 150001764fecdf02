"""Error Hierarchy — typed, categorized exceptions for all rental and billing failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FilmRentalError base: FastAPI global handler catches all
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
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rental_id: str | None = None
    customer_id: str | None = None
    staff_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class FilmRentalError(Exception):
    """Base exception for all film rental errors."""

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
                    "rental_id": self.context.rental_id,
                    "customer_id": self.context.customer_id,
                    "staff_id": self.context.staff_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RentalValidationError(FilmRentalError):
    """Numeric or identifier input outside its valid domain."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(FilmRentalError):
    """Requested resource does not exist (or a list lookup came back empty)."""
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


class NoResultsError(ResourceNotFoundError):
    """List lookup that treats an empty result as a failure."""
    def __init__(self, resource_type: str, scope: str, context: ErrorContext | None = None):
        super().__init__(resource_type, scope, context)
        self.message = f"No {resource_type.lower()} records found for {scope}"
        self.args = (self.message,)


class InactiveAccountError(FilmRentalError):
    """Customer or staff member is deactivated and may not transact."""
    def __init__(
        self, account_type: str, account_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{account_type} '{account_id}' is not active",
            "ACCOUNT_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 403,
        )
        self.account_type = account_type


class NoAvailabilityError(FilmRentalError):
    """No free copy of the film at the store."""
    def __init__(
        self, film_id: str, store_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"No available inventory for film '{film_id}' at store '{store_id}'",
            "NO_AVAILABILITY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadyReturnedError(FilmRentalError):
    """Return attempted on a rental whose marker already lies in the past."""
    def __init__(self, rental_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.rental_id = rental_id
        super().__init__(
            f"Rental '{rental_id}' has already been returned",
            "ALREADY_RETURNED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )


class HasActiveRentalsError(FilmRentalError):
    """Customer deactivation refused while rentals are still out."""
    def __init__(
        self, customer_id: str, active_count: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.customer_id = customer_id
        super().__init__(
            f"Customer '{customer_id}' has {active_count} active rental(s) "
            "and cannot be deactivated",
            "HAS_ACTIVE_RENTALS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.active_count = active_count


class DuplicateRecordError(FilmRentalError):
    """Unique field (email, username) already taken by another record."""
    def __init__(
        self, resource_type: str, field: str, value: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} {field} '{value}' is already in use",
            "DUPLICATE_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.field = field


class RecordInUseError(FilmRentalError):
    """Record is still referenced by ledger entries and cannot be removed."""
    def __init__(
        self, resource_type: str, resource_id: str, dependents: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' is referenced by "
            f"{dependents} payment(s) and cannot be deleted",
            "RECORD_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.dependents = dependents


class AllocationConflictError(FilmRentalError):
    """Every candidate copy was claimed by a concurrent rental first."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ALLOCATION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FilmRentalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
