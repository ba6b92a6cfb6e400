"""Error Hierarchy — typed, categorized exceptions for all Biblioteca failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() always carries a top-level "message" string
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LibraryError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    book_id: str | None = None
    rental_id: str | None = None


class LibraryError(Exception):
    """Base exception for all Biblioteca errors."""

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
            "message": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(LibraryError):
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


class ConflictError(LibraryError):
    """Write would duplicate a unique field or break an ownership rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class InsufficientStockError(LibraryError):
    """Rental asks for more copies than the book has available."""
    def __init__(self, title: str, requested: int, context: ErrorContext | None = None):
        super().__init__(
            f"Not enough copies of '{title}' available to rent {requested}",
            "INSUFFICIENT_STOCK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.requested = requested


class AlreadyReturnedError(LibraryError):
    """Rental was already returned; the transition happens only once."""
    def __init__(self, rental_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Rental '{rental_id}' has already been returned",
            "ALREADY_RETURNED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class OutOfRangeError(LibraryError):
    """Positional index outside the bounds of a list."""
    def __init__(self, index: int, size: int, context: ErrorContext | None = None):
        super().__init__(
            f"Index {index} is out of range (size {size})",
            "OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.index = index
        self.size = size


class UnauthorizedError(LibraryError):
    """Credentials or bearer token rejected."""
    def __init__(
        self, message: str = "Invalid credentials", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LibraryError):
    """Database operation failed. Message never carries driver text."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
