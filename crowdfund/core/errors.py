"""Error Hierarchy — typed, categorized exceptions for all Crowdfund failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CrowdfundError base: FastAPI global handler catches all
    - Client-side errors (UnauthorizedError, ApiRequestError) share the base so the
      session gateway and the server speak the same error vocabulary
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    campaign_id: int | None = None
    user_id: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CrowdfundError(Exception):
    """Base exception for all Crowdfund errors."""

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
                    "campaign_id": self.context.campaign_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(CrowdfundError):
    """Request data failed a domain validation rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidDonationAmountError(ValidationError):
    """Donation amount is zero, negative, or not a number."""
    def __init__(self, amount: object, context: ErrorContext | None = None):
        super().__init__(
            "Donation amount must be positive", "amount", context,
        )
        self.code = "INVALID_DONATION_AMOUNT"
        self.amount = amount


class GuestNameRequiredError(ValidationError):
    """Guest donation submitted without a donor name."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Guest donations require a donor name", "donor_name", context,
        )
        self.code = "GUEST_NAME_REQUIRED"


class CampaignNotActiveError(CrowdfundError):
    """Campaign exists but is not accepting donations."""
    def __init__(self, campaign_id: int, status: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.campaign_id = campaign_id
        super().__init__(
            "Campaign is not accepting donations",
            "CAMPAIGN_NOT_ACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.status = status


class ResourceNotFoundError(CrowdfundError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class AuthenticationError(CrowdfundError):
    """Credentials missing, wrong, expired, or rejected by the server."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(CrowdfundError):
    """Authenticated user is not allowed to act on the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ConflictError(CrowdfundError):
    """Unique value already taken (username, email)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CrowdfundError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Client Errors (raised by the session gateway side) ─────────

class UnauthorizedError(CrowdfundError):
    """Server rejected the bearer credential (HTTP 401)."""
    def __init__(self, message: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class NotAuthenticatedError(CrowdfundError):
    """An authenticated call was attempted without a usable credential."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No usable credential; log in first",
            "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ApiRequestError(CrowdfundError):
    """Remote API answered with a non-2xx status other than 401."""
    def __init__(self, message: str, status_code: int, context: ErrorContext | None = None):
        super().__init__(
            message, "API_REQUEST_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, status_code,
        )
        self.status_code = status_code
