"""Error Hierarchy — typed, categorized exceptions for every Taskhub failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All client-facing errors are 400-level: every failure is attributable to caller input
    - BadRequestError carries one detail per rejected field, in the decoder's own words
    - to_response() produces the REST envelope used by every error response
    - TokenValidationError never reaches the client directly (wrapped in UnauthorizedError)

Design Decisions:
    - Single hierarchy with TaskhubError base: one global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: request details travel with the error, not with the logger
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
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskhubError(Exception):
    """Base exception for all Taskhub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers = headers

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
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class BadRequestError(TaskhubError):
    """Request body could not be decoded into the expected shape."""
    def __init__(
        self,
        message: str,
        details: list[dict[str, str]] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details or []

    @classmethod
    def from_decoder_errors(
        cls, errors: list[dict], loc_prefix: tuple[str, ...] = (),
    ) -> "BadRequestError":
        """Build from pydantic error dicts, one detail per offending field.

        loc_prefix is prepended to each location so that bodies decoded by
        hand report "body.<field>" like the ones FastAPI decodes itself.
        """
        details = [
            {
                "field": ".".join(str(loc) for loc in (*loc_prefix, *e["loc"])),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ]
        message = "; ".join(f"{d['field']}: {d['message']}" for d in details)
        return cls(message or "Invalid request body", details)

    def to_response(self) -> dict:
        response = super().to_response()
        if self.details:
            response["error"]["details"] = self.details
        return response


class ResourceNotFoundError(TaskhubError):
    """Identifier does not address a record in the collection."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(TaskhubError):
    """Credential missing or rejected by the token validator."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unauthorized: {reason}",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
            headers={"WWW-Authenticate": "Bearer"},
        )
        self.reason = reason


# ─── Collaborator Errors (internal, never rendered directly) ────

class TokenValidationError(Exception):
    """Raised by a TokenValidator when a credential cannot be resolved."""
